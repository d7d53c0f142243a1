#!/usr/bin/env python3
"""
HealthPulse — Запуск API сервера

Запуск:
    python scripts/run_api.py --data-dir ./data
    python scripts/run_api.py --data-dir ./data --port 8080
    python scripts/run_api.py --host 127.0.0.1 --port 8000 --config config.yaml
"""

import os
import sys
import argparse
import logging
from pathlib import Path

import uvicorn

# Додаємо корінь проекту до path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def main():
    parser = argparse.ArgumentParser(description='HealthPulse API Server')
    parser.add_argument('--host', default='0.0.0.0', help='Host (default: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=8000, help='Port (default: 8000)')
    parser.add_argument('--data-dir', default=None, help='Directory with CSV sources')
    parser.add_argument('--config', default=None, help='YAML config for the model')
    parser.add_argument('--reload', action='store_true', help='Enable auto-reload')
    parser.add_argument('--workers', type=int, default=1, help='Number of workers')

    args = parser.parse_args()

    # APIConfig читає environment при імпорті додатку
    if args.data_dir:
        os.environ["DATA_DIR"] = str(Path(args.data_dir).resolve())
    if args.config:
        os.environ["HEALTH_PULSE_CONFIG"] = str(Path(args.config).resolve())
    os.environ["API_HOST"] = args.host
    os.environ["API_PORT"] = str(args.port)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    print("=" * 60)
    print("🏥 HealthPulse — API Server")
    print("=" * 60)
    print(f"   Host: {args.host}")
    print(f"   Port: {args.port}")
    print(f"   Data: {os.environ.get('DATA_DIR', 'auto')}")
    print(f"   Reload: {args.reload}")
    print("=" * 60)

    uvicorn.run(
        "health_pulse.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1,
        log_level="info",
    )


if __name__ == "__main__":
    main()
