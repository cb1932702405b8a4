"""
The stream package provides the duplex stream primitive used by the switcher and by the streams it
switches between.
"""
