"""Command line entry points: usconst-build, usconst-serve and usconst-search."""
