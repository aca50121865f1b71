"""Reader: turns Lox source text into tokens and tokens into an AST."""
