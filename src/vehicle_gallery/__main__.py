"""
this_file: src/vehicle_gallery/__main__.py

Allow ``python -m vehicle_gallery``.
"""

from vehicle_gallery.cli import main

if __name__ == "__main__":
    main()
