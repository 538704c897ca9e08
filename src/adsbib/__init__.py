"""adsbib - search the NASA ADS and pull BibTeX records from the result list."""
