"""
Settings and configuration for wakachi.

Every value can be overridden through the environment.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# JMdict file (user must download it)
DEFAULT_JMDICT_PATH = DATA_DIR / "JMdict_e"
JMDICT_PATH = Path(os.environ.get("WAKACHI_JMDICT_PATH", DEFAULT_JMDICT_PATH))

# Conjugation table (bundled with package)
DEFAULT_CONJUGATIONS_PATH = DATA_DIR / "conjugations.tsv"
CONJUGATIONS_PATH = Path(os.environ.get("WAKACHI_CONJUGATIONS_PATH", DEFAULT_CONJUGATIONS_PATH))

# Download URL for JMdict
JMDICT_URL = "http://ftp.edrdg.org/pub/Nihongo/JMdict_e.gz"

# Which entries jump the queue under a shared reading key:
# "kana-or-particle" (default) or "kana-only" (legacy behaviour)
PREPEND_POLICY = os.environ.get("WAKACHI_PREPEND_POLICY", "kana-or-particle")

# Debug mode
DEBUG = os.environ.get("WAKACHI_DEBUG", "").lower() in ("1", "true", "yes")

# HTTP server
SERVER_HOST = os.environ.get("WAKACHI_HOST", "0.0.0.0")
SERVER_PORT = int(os.environ.get("WAKACHI_PORT", "8080"))

# Longest sentence accepted by the HTTP server (characters)
MAX_SENTENCE_LENGTH = 1000 * 1000

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
