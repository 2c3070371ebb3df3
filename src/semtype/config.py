"""Process configuration read from environment variables"""
import os

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

# Run modes that enable the startup rule checks
NON_PROD_MODES = {'dev', 'test'}


def get_run_mode() -> str:
    """Current run mode: prod (default), dev or test."""
    return os.getenv('SEMTYPE_RUN_MODE', 'prod').strip().lower() or 'prod'


def is_prod() -> bool:
    """True unless SEMTYPE_RUN_MODE names a development mode."""
    return get_run_mode() not in NON_PROD_MODES


def get_datasource_table() -> str:
    """Catalog table that stores one row per data source with its engine."""
    return os.getenv('SEMTYPE_DATASOURCE_TABLE', 'metabase_database')
