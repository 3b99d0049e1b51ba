#!/usr/bin/env python3
"""
HemoScan - Запуск API сервера

Запуск:
    python scripts/run_api.py
    python scripts/run_api.py --port 8080
    python scripts/run_api.py --host 127.0.0.1 --port 8000
"""

import sys
import argparse
import logging
from pathlib import Path

# Додаємо корінь проекту до path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from hemoscan.api.config import config


def main():
    parser = argparse.ArgumentParser(description='HemoScan API Server')
    parser.add_argument('--host', default=config.host, help=f'Host (default: {config.host})')
    parser.add_argument('--port', type=int, default=config.port, help=f'Port (default: {config.port})')
    parser.add_argument('--reload', action='store_true', help='Enable auto-reload')
    parser.add_argument('--log-level', default='info', help='Log level (default: info)')

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("HemoScan - API Server")
    print("=" * 60)
    print(f"   Host: {args.host}")
    print(f"   Port: {args.port}")
    print(f"   Reload: {args.reload}")
    print("=" * 60)

    # Модель навчається один раз на процес, тому лише один worker
    uvicorn.run(
        "hemoscan.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
