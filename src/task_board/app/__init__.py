"""Task models, query pipeline, store, loader, and page rendering."""
