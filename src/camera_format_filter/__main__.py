"""Entry point for camera_format_filter package"""

import sys

from camera_format_filter.main import main

if __name__ == "__main__":
    sys.exit(main())
