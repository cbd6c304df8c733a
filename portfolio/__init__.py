"""Portfolio site backend: Codeforces proxy, statistics and rating graph."""
