"""Board strings shared by the tests. Rows from top (row 0) to bottom, '.' empty, 'B' black, 'W' white."""

INITIAL = "......../......../......../...WB.../...BW.../......../......../........"

# initial board after black played d6 (2,3)
AFTER_D6 = "......../......../...B..../...BB.../...BW.../......../......../........"

# Black to move. Whichever move black picks (a8 or h8), white has to pass and black moves again.
FORCED_PASS = ".WBBBBW./......../......../......../......../......../......../........"

# Same shape with colors swapped: white moves twice in a row and then the game is over.
FORCED_PASS_WHITE = ".BWWWWB./......../......../......../......../......../......../........"

# Black cannot move, white can (b8 is not bounded for black, c8 captures for white)
BLACK_MUST_PASS = "WB....../......../......../......../......../......../......../........"

# Nobody can move although the board is far from full
ONLY_BLACK = "B......./......../......../......../......../......../......../........"
DEAD_DRAW = "B......./......../......../......../......../......../......../.......W"

# Black on d5 (3,3) captures north, west and south-east at once
THREE_DIRECTIONS = "......../...B..../..WW..../.BW...../....W.../.....B../......../........"

# The white run ends at the board edge, nothing to capture for black on d8
RUN_TO_EDGE = "WWW...../......../......../......../......../......../......../........"

# Black can play the X-square b7 (1,1) next to an empty corner, or f5 (3,5)
X_SQUARE = "......../......../..W...../...BW.../......../......../......../........"

# Black can play the edge d8 (0,3), or f5 (3,5) / f4 (4,5) in the middle
EDGE_AVAILABLE = "......../...W..../...B..../...BW.../......../......../......../........"

# Black can take the corner a8 next to the usual opening moves
CORNER_AVAILABLE = ".WB...../......../......../...WB.../...BW.../......../......../........"
