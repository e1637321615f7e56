"""Services Layer — ResourceHandler, the outcome-to-HTTP contract shared by all resources."""
