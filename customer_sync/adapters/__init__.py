"""Identity client implementations and the factory that builds them."""
