#!/usr/bin/env python3
"""
Palate Cleanser - random embedded tracks with accounts and favorites

Single entry point for the application.
Run with: python run.py
"""

import logging
import os
import sys

from dotenv import load_dotenv
load_dotenv()

from app import create_app
from app.exceptions import ConfigurationError

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

try:
    app = create_app()
except ConfigurationError as e:
    print(f"FATAL ERROR: {e}")
    sys.exit(1)

if __name__ == '__main__':
    host = os.getenv('PALATE_HOST', '0.0.0.0')
    port = int(os.getenv('PALATE_PORT', '3000'))

    print(f"""
    🎵  Palate Cleanser
    🌐 Open http://localhost:{port} in your browser

    Press Ctrl+C to stop
    """)

    app.run(debug=False, host=host, port=port, threaded=True)
