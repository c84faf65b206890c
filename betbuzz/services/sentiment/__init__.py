"""Social chatter sentiment: score snippets and aggregate them."""
