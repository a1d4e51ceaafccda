"""Shared constants and configuration."""

SCRIPT_NAME = 'Embed PDF Pages'
LOG_FILE_NAME = 'Embed PDF Pages Log.txt'

# Output formats and their file extensions
OUTPUT_FORMATS = {
    'PSD': 'psd',
    'TIFF': 'tif',
}
DEFAULT_OUTPUT_FORMAT = 'PSD'

# Text layer defaults (RGB colour, position as percentage of the canvas)
TEXT_LAYER_COLOR = (25, 227, 102)
TEXT_LAYER_POSITION = (50, 50)
