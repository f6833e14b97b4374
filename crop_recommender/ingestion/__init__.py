"""
Ingestion layer — reading crop catalogs supplied as files.

Submodules:
  catalog_file — JSON / CSV catalog reader with lenient row normalization
"""
