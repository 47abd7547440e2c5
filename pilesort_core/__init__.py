"""
pilesort core Python package.

Pure-logic pieces behind the card-sorting guide, kept apart from the
command line and web front ends so they can be tested on their own.
Modules:
- streak.py: Streak, StreakArray (run-length encoded piles)
- deal.py: random permutation and deck building
- state.py: SessionState
- partition.py: median split, one transfer at a time
- driver.py: advance(), Driver
- cli.py: command line front end
"""
