"""
Benchmark suite for jecs parsing performance.

Compares jecs on JECS documents against JSON libraries parsing the same
data written as JSON:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed and memory usage across different data types.
"""
