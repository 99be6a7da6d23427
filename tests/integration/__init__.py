"""Integration tests for components working together over HTTP.

Coverage:
    - Upload, select, analyze and delete flows end to end
    - Host application health endpoint

Runs the real client against the fake service from conftest.py.
"""
