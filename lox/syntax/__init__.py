"""Abstract syntax tree produced by the parser and walked by the evaluator."""
