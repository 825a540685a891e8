"""Sample Room: apparel production catalog backend with a secure asset proxy."""
