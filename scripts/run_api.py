#!/usr/bin/env python3
"""
Run the proxy API locally.

Environment:
- API_BASE_URL (backend, default http://localhost:8000)
- HOST / PORT (default 127.0.0.1:5173)
"""

import os

import uvicorn


def main() -> int:
    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5173")),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
