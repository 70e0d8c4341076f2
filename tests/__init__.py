"""Test suite for clawconnect.

Unit tests live under unit/, one folder per package area. Socket and viewer
fakes shared between them are in helpers/.
"""
