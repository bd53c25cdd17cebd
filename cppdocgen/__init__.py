"""Static documentation site generator for C++ codebases."""
