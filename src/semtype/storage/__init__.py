"""Access to the data-source catalog"""
from .connection import get_connection, get_connection_string
from .engines import EngineLookup, StaticEngineLookup, PostgresEngineLookup
