# app/models/__init__.py
from .item import ItemRecord
