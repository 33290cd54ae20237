#!/usr/bin/env python3
"""
QuotationSheet Entry Point

Commands:
  uv run main.py headers   # Write and bold the Quotations header row
  uv run main.py open      # Show the menu registered on document open
  uv run main.py refresh   # Run the "Refresh List" menu action
  uv run main.py status    # Show current configuration
  uv run main.py reset     # Reset saved configuration

Examples:
  SPREADSHEET_ID=... uv run main.py headers
  EMAIL_ACTION_HANDLER=mail_import:process uv run main.py refresh
"""

import sys

from quotation_sheet import main

if __name__ == "__main__":
    sys.exit(main() or 0)
