"""Command line interface for cached-externals"""
