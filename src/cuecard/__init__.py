""" cuecard: dialog sequences and gated tutorials for games """
