"""View rendering module for themed HTML pages.

The ThemeRenderer resolves views across theme directories, wraps them in
the theme layout and post-processes asset URLs.
"""
