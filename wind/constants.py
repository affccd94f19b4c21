"""Constants and configuration for the wind editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Document
    PLACEHOLDER_PATH = "temp"  # Save target when no path was ever given
    NO_NAME = "[No Name]"  # Display name of a document without a path

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Layout
    STATUS_BAR_HEIGHT = 1  # Rows reserved at the bottom of the screen

    # Status messages
    SAVED_MESSAGE = "'{}' saved, {}L {}B"
    SAVE_FAILED_MESSAGE = "Could not save the document: {}"
