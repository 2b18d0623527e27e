import os
import sys
import logging

# ============== LOGGING ==============
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level=None):
    logging.basicConfig(stream=sys.stdout, level=level or LOG_LEVEL, format=LOG_FORMAT)


# ============== SERVER ==============
PORT = int(os.environ.get('PORT', 3000))
CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

# ============== STAGING DIRECTORIES ==============
UPLOAD_DIR = os.environ.get('UPLOAD_DIR', 'uploads')
COMPRESSED_DIR = os.environ.get('COMPRESSED_DIR', 'compressed_pdfs')

# ============== LIMITS ==============
# Flask rejects larger bodies with 413 before the view runs
MAX_UPLOAD_MB = int(os.environ.get('MAX_UPLOAD_MB', 50))
MAX_CONTENT_LENGTH = MAX_UPLOAD_MB * 1024 * 1024

# ============== GHOSTSCRIPT ==============
GS_BINARY = os.environ.get('GS_BINARY', 'gswin64c' if os.name == 'nt' else 'gs')
# Seconds; 0 lets Ghostscript run for as long as it needs
GS_TIMEOUT = int(os.environ.get('GS_TIMEOUT', 300)) or None


def default_config():
    return {
        'UPLOAD_DIR': UPLOAD_DIR,
        'COMPRESSED_DIR': COMPRESSED_DIR,
        'MAX_CONTENT_LENGTH': MAX_CONTENT_LENGTH,
        'GS_BINARY': GS_BINARY,
        'GS_TIMEOUT': GS_TIMEOUT,
        'CORS_ORIGINS': CORS_ORIGINS,
    }
