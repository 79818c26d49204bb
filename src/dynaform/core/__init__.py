"""
Core dynaform components: IR types, type classifier, schema builder,
criteria language, records adapters and configuration.
"""
