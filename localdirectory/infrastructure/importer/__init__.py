from .business_importer import BusinessImporter, COLUMN_PATTERNS, SUPPORTED_EXTENSIONS

__all__ = ["BusinessImporter", "COLUMN_PATTERNS", "SUPPORTED_EXTENSIONS"]
