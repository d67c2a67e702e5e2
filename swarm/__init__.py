"""
Swarm Consensus Engine

Many worker personas answer a question in parallel, a fixed panel of judge
personas ranks the answers, a Borda-style count picks a winner, and a
finalizer rewrites the winner into the delivered answer.
"""

__version__ = "1.0.0"
__author__ = "Swarm Consensus Team"
