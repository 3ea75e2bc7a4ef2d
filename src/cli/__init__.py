"""
Command-line front end for the microdata-rdf tool.
"""
