"""
Configuration for the Heading Capitalization Checker.
"""

import os
import sys
import logging
from dotenv import load_dotenv
from typing import Optional

# Load environment variables (optional - only if .env file exists)
load_dotenv()

class Config:
    """Application configuration."""

    TESTING = False

    # Files picked up when a directory is given on the command line
    ALLOWED_EXTENSIONS = {'md', 'markdown'}

    # Default rule options file; command-line flags override its values
    HEADING_RULE_CONFIG = os.environ.get('HEADING_RULE_CONFIG')

    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'WARNING')
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    @classmethod
    def init_logging(cls, level: Optional[str] = None) -> None:
        """Configure root logging once for command-line runs."""
        level_name = (level or cls.LOG_LEVEL).upper()
        logging.basicConfig(
            level=getattr(logging, level_name, logging.WARNING),
            format=cls.LOG_FORMAT,
            handlers=[logging.StreamHandler(sys.stderr)]
        )

    @classmethod
    def allowed_file(cls, filename: str) -> bool:
        """Check if file extension is allowed."""
        return '.' in filename and \
               filename.rsplit('.', 1)[1].lower() in cls.ALLOWED_EXTENSIONS


# For testing only
class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    LOG_LEVEL = 'DEBUG'
    HEADING_RULE_CONFIG = None
