"""Request and response schemas for Snippetbox."""
