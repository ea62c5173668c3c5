"""US Constitution reader: content build, filter layer and preview server.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

__version__ = "0.1.0"
