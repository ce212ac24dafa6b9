DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_TIMEOUT = 60.0
ANTHROPIC_API_URL = "https://api.anthropic.com/v1"
ANTHROPIC_VERSION = "2023-06-01"

# Fixed theme for fenced code blocks.
CODE_THEME = "monokai"

# Table geometry.
TABLE_BORDER_WIDTH = 40
TABLE_CELL_WIDTH = 15

# Inline / block styles, in rich style syntax.
HEADER_STYLE = "bold cyan"
BLOCKQUOTE_STYLE = "italic bright_blue"
BOLD_STYLE = "bold bright_white"
ITALIC_STYLE = "italic"
INLINE_CODE_STYLE = "yellow"

# Terminal chrome for the interactive loop.
ORANGE = "rgb(255,128,0)"
BLUE = "rgb(80,200,255)"
PURPLE = "rgb(190,0,255)"

PROMPT_TEXT = "CORTEX://> "

BANNER_TEXT = r"""
   ▄████▄   ▒█████   ██▀███  ▄▄▄█████▓▓█████ ▒██   ██▒
  ▒██▀ ▀█  ▒██▒  ██▒▓██ ▒ ██▒▓  ██▒ ▓▒▓█   ▀ ▒▒ █ █ ▒░
  ▒▓█    ▄ ▒██░  ██▒▓██ ░▄█ ▒▒ ▓██░ ▒░▒███   ░░  █   ░
  ▒▓▓▄ ▄██▒▒██   ██░▒██▀▀█▄  ░ ▓██▓ ░ ▒▓█  ▄  ░ █ █ ▒
  ▒ ▓███▀ ░░ ████▓▒░░██▓ ▒██▒  ▒██▒ ░ ░▒████▒▒██▒ ▒██▒
  ░ ░▒ ▒  ░░ ▒░▒░▒░ ░ ▒▓ ░▒▓░  ▒ ░░   ░░ ▒░ ░▒▒ ░ ░▓ ░
    ░  ▒     ░ ▒ ▒░   ░▒ ░ ▒░    ░     ░ ░  ░░░   ░▒ ░
  ░        ░ ░ ░ ▒    ░░   ░   ░         ░    ░    ░
  ░ ░          ░ ░     ░                 ░  ░ ░    ░
  ░                                                    """
