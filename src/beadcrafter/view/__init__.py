"""
The VIEW layer: Qt widgets and the PyVista scene. It reads session snapshots
and playback steps; it never writes PlaybackState.
"""
