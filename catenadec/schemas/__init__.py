"""JSON schemas shipped with catenadec."""
