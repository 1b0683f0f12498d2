# Local Directory - Business Listings & Reviews
# ==============================================
# A small directory service using a layered layout:
#
# - web/:            FastAPI app (JSON API under /api, public and admin pages)
# - clients/:        Console-side clients and data sources (live API or in-memory)
# - infrastructure/: SQLite persistence, spreadsheet importer, settings
