"""Runtime settings, read from the environment (and a .env file if present)."""

import os

from dotenv import load_dotenv

load_dotenv()  # load environment variables from .env file

LOG_LEVEL = os.getenv("WORKFLOW_BACKBONE_LOG_LEVEL", "INFO").upper()

# indentation of exported workflow documents
JSON_INDENT = int(os.getenv("WORKFLOW_BACKBONE_JSON_INDENT", "2"))
