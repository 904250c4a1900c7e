"""
Shared fixtures for the SEO Scorer test suite.
"""

import os
import sys

import pytest

# Add the project root to path for imports if running tests from the root directory
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# 40 characters
TITLE = "Example Widgets - Handmade Oak Furniture"
# Padded to exactly 140 characters
META_DESCRIPTION = "Handcrafted oak tables and chairs built to order in a small family workshop".ljust(140, ".")

OPTIMIZED_HTML = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <meta name="description" content="{META_DESCRIPTION}">
    <title>{TITLE}</title>
    <style>body {{ font-family: sans-serif; }}</style>
</head>
<body>
    <h1>Example Widgets Workshop</h1>
    <p>Every table leaves our barn after careful sanding, oiling, waxing and inspection
    by experienced makers who learned their craft from grandparents living nearby since nineteen fifty.</p>
    <p>Customers choose walnut, cherry, maple or reclaimed pine finishes.</p>
    <img src="/img/table.jpg" alt="Oak dining table">
    <script>console.log('analytics analytics analytics');</script>
</body>
</html>
"""


@pytest.fixture
def optimized_html():
    """A document that passes every check."""
    return OPTIMIZED_HTML


@pytest.fixture
def bare_html():
    """A fragment with none of the expected head elements."""
    return "<div><p>hello</p></div>"
