"""
pyfiles Test Suite

Run with: python -m unittest discover -s pyfiles/tests -t .
Or: python -m pytest pyfiles/tests -v
"""
