"""Section renderers and the row builders that feed them."""
