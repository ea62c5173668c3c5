"""Site generator module for exporting the built constitution site.

Modules:
    export_site: Copy the built site into the output directory, minifying HTML

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""
