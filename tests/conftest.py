import os

# Widgets must be constructible on machines without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
