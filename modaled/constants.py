"""Constants and configuration for the modaled editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Display
    FILLER_MARKER = "~"  # Drawn on rows past the end of the document
    BLANK_CELL = " "  # Returned for out-of-range buffer reads
    CONTROL_PLACEHOLDER = "?"  # Shown for control characters other than tab
    STATUS_BAR_ROWS = 1  # Rows reserved at the bottom of the screen

    # Status bar
    NO_FILE_PLACEHOLDER = "no file"
    MODIFIED_MARKER = "[+]"
    STATUS_TEXT_RGB = (0, 0, 0)
    STATUS_FILE_TEXT_RGB = (255, 255, 255)
    STATUS_FILE_BG_RGB = (67, 70, 89)
    NORMAL_MODE_RGB = (184, 144, 243)
    INSERT_MODE_RGB = (194, 255, 102)

    # File operations
    DEFAULT_NEWLINE = "\n"
    WINDOWS_NEWLINE = "\r\n"
    FILE_ENCODING = "utf-8"
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Status messages
    SAVED_MESSAGE = "Saved to {}"
    NO_FILENAME_MESSAGE = "Error: No file name"
    PERMISSION_DENIED_MESSAGE = "Error: Permission denied saving {}"
    NO_SPACE_MESSAGE = "Error: No space left on device"
    CANNOT_SAVE_MESSAGE = "Error: Cannot save to {}"
