from blocks_puzzle.game import Model, Piece


def make_model(width=4, height=4, *pieces):
    model = Model(width, height)
    for p in pieces:
        model.deal(p)
    return model


def fill_row(model, row, skip=()):
    """Fill a row one cell at a time, leaving the columns in `skip` open."""
    dot = Piece.parse("*")
    for col in range(model.width):
        if col not in skip and not model.get(row, col):
            model.place(dot, row, col)


def fill_col(model, col, skip=()):
    dot = Piece.parse("*")
    for row in range(model.height):
        if row not in skip and not model.get(row, col):
            model.place(dot, row, col)
