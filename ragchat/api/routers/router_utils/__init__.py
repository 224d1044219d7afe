"""Router helpers: error mapping and the data-stream encoder."""
