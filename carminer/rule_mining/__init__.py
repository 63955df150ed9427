"""
Rule Mining Module

Class association rule mining:
- Labeled itemset lattice (Apriori join and prune)
- Rule generation and confidence ranking
- Adaptive minimum-support search
"""
