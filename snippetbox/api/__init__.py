"""HTTP surface of Snippetbox."""
