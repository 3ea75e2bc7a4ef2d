"""Microdata to RDF extractor tests."""
