"""
Project-wide configuration constants.
"""

# Valuation model config shipped with the package (salary_model/models/configs/<name>.yaml)
DEFAULT_VALUATION_CONFIG = "default"

# Dataset and output locations, relative to the repository root
DEFAULT_PLAYERS_PATH = "data/players.json"
PROCESSED_DIR = "data/processed"
