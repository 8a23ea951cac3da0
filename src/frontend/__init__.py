"""Command-line and Flask surfaces over sanskrit_search.Engine."""
