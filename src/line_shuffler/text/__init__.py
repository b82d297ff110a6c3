"""Text preprocessing helpers, independent of the shuffle."""

from line_shuffler.text.encoding import convert_to_valid_utf8, each_line_in_file, transliterate

__all__ = ["convert_to_valid_utf8", "each_line_in_file", "transliterate"]
