"""
Server entry point.

Usage:
    python -m mini_ledger
"""

import uvicorn

from mini_ledger.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "mini_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
