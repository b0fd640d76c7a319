"""
EEU Complaints Proxy.

An async HTTP proxy that exposes a REST surface to the complaints dashboard
and forwards every call, wrapped in a JSON envelope, to the Google Apps
Script web app that keeps the data in a spreadsheet.
"""

__version__ = "1.0.0"
