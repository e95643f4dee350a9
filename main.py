#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py run my_script.txt
    python main.py apply photo.jpg mosaic --seeds 800 -o output/photo_mosaic.png
    python main.py generate greeceFlag --height 90 --width 135

Or launch the interactive editor:

    streamlit run streamlit_app.py
"""

from pixel_studio.cli import app

if __name__ == "__main__":
    app()
