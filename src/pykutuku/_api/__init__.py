"""Endpoint payload builders and parsers.

Services call the transport; these modules turn raw JSON into models.
"""
