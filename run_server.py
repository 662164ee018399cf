#!/usr/bin/env python3
"""Development server runner for the subsector generator."""

import logging

import uvicorn

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    uvicorn.run(
        "subsector.server.main:app",
        host="0.0.0.0",
        port=9000,
        reload=True,  # Auto-reload on code changes
        log_level="info",
    )
