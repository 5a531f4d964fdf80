"""
UI-agnostic widgets

Modules:
- typeahead: Multi-select search-and-chip state machine
"""

from src.widgets.typeahead import Typeahead, TypeaheadItem, TypeaheadState
