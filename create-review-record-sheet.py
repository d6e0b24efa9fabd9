#!/usr/bin/env python3
"""
Backlog Review Record Sheet
Exports the review comments of one Backlog pull request to an Excel file.
"""

from review_record_sheet.main import main


if __name__ == "__main__":
    main()
