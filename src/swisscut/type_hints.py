"""Type hints used in Swiss Cut."""

from typing import Dict, List, Literal, Optional, Tuple

# Opaque player identifier supplied by the caller
PlayerId = str
MaybePlayerId = Optional[str]

# Opaque match identifier ("swiss-r2-m3", "topcut-r1-m4", or a storage id)
MatchId = str

# Allowed best-of values
BestOf = Literal[1, 3, 5]

# (seed of player 1, seed of player 2) for a first-round bracket matchup
SeedMatchup = Tuple[int, int]

# All first-round matchups of a bracket
SeedMatchups = List[SeedMatchup]

# Player id -> value lookup used while computing tiebreakers
PercentageTable = Dict[PlayerId, float]
