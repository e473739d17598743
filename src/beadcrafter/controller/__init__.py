"""
The CONTROLLER layer owns the time-driven behavior (playback timer and
transport operations). It writes PlaybackState; views only read it.
"""
