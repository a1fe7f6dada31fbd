"""ESC/POS protocol layer: command frames, raster transfer and the printer session."""
