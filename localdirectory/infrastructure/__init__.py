# Infrastructure Layer
# ====================
# - persistence/: SQLite storage for businesses and reviews
# - importer/:    CSV/Excel listing import (pandas)
# - config/:      Environment and settings management
