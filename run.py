"""
Development Runner
==================
Starts the viewer straight from a source checkout, without installing it.

Why is this file needed?
------------------------
1. It sits next to 'src' so a developer can run the app with one command.
2. It puts 'src' on 'sys.path' so 'beadcrafter' resolves without
   'pip install -e .'.
3. On Windows it sets an explicit AppUserModelID, so the taskbar groups the
   window under its own icon instead of python.exe.

Usage:
    $ python run.py --pattern gecko-001
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(current_dir, 'src'))

APP_ID = 'Beadcrafter.AssemblyViewer'
try:
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(APP_ID)
except (AttributeError, ImportError):
    # Not on Windows
    pass

from beadcrafter.main import main

if __name__ == "__main__":
    main()
