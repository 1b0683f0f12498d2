"""
Local Business Directory - Web Server Entry Point
==================================================

Run this to start the API and pages:
    python main.py

Then open http://127.0.0.1:3000 for the directory and /admin for the admin panel.

Other entry points:
    python run_directory.py    # browse and review from the console
    python run_admin.py        # delete listings from the console
    python run_import.py FILE  # load listings from a spreadsheet
"""

import uvicorn

from localdirectory.infrastructure.config import get_settings


def main():
    """Start the web server."""
    settings = get_settings()
    host, port = settings.server.host, settings.server.port

    print("\n" + "=" * 50)
    print("   Local Business Directory")
    print("=" * 50)
    print(f"\n   Starting server at http://{host}:{port}")
    print(f"   API accessible at http://{host}:{port}/api/...")
    print("   Press Ctrl+C to stop\n")

    uvicorn.run(
        "localdirectory.web.app:app",
        host=host,
        port=port,
        reload=True,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
