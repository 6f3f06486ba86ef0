"""Tree-walk evaluation: operators, calls, static checks and the evaluator."""
