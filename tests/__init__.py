"""Test suite for the msak throughput client.

Unit tests live under unit/, grouped by package area; integration tests run
full phases against a local websockets server. Shared fakes live in the
helpers/ subpackage.
"""
