"""Infrastructure: schema registry, SQL generation and field codecs."""
