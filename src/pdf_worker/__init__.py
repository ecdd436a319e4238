"""HTML to PDF rendering worker."""
