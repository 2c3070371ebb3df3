"""Type tags and the is-a hierarchy"""
from .hierarchy import TypeHierarchy, TYPES, TYPE_PARENTS, ROOT_TYPE
