"""Scanner and parser: source text -> tokens -> syntax tree."""
