"""
droidplace: classification and placement of generated files in Android projects.

Given a raw text blob that is supposed to be a file (source code, markup, or a
fenced block lifted from a chat response), droidplace decides what kind of
artifact it is, what it should be called and where it belongs in a conventional
Android/Kotlin project tree, then writes it without clobbering existing files.
"""

__version__ = "1.0.0"
__author__ = "droidplace Team"
