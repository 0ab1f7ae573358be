"""Test suite for adaptive_form.

This package contains tests for:
- Validators and validation results
- Field and form configuration, including declarative loading
- Change notification
- The form controller (values, validation, submission, lifecycle)
- The renderer registry and built-in bindings
- Integration scenarios (full form lifecycle, custom field types)
"""
