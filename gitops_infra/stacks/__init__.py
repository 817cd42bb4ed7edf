"""
Stack programs
cluster -> prerequisites -> kargo, each consuming the previous stack's outputs
"""
