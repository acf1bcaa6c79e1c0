from falling_block_rl.game import ActivePiece, TetrominoType, color_of, rgb255, shape_of


def test_catalog_has_seven_four_cell_shapes():
    assert len(TetrominoType) == 7
    for kind in TetrominoType:
        offsets = shape_of(kind)
        assert len(offsets) == 4
        assert len(set(offsets)) == 4
        assert all(0.0 <= c <= 1.0 for c in color_of(kind))


def test_rgb255_scales_color():
    assert rgb255(TetrominoType.SQUARE) == (255, 255, 0)
    assert rgb255(TetrominoType.L) == (255, 128, 0)


def test_spawn_anchor_for_width_ten():
    piece = ActivePiece.spawn(TetrominoType.T, 10)
    assert (piece.x, piece.y) == (3, 0)
    assert piece.offsets == shape_of(TetrominoType.T)


def test_cells_are_anchor_plus_offsets():
    piece = ActivePiece.spawn(TetrominoType.SQUARE, 10)
    assert sorted(piece.cells()) == [(3, 0), (3, 1), (4, 0), (4, 1)]


def test_translated_returns_new_piece():
    piece = ActivePiece.spawn(TetrominoType.LINE, 10)
    moved = piece.translated(-1, 2)
    assert (moved.x, moved.y) == (2, 2)
    assert (piece.x, piece.y) == (3, 0)
    assert moved.offsets == piece.offsets


def test_rotated_maps_offsets():
    piece = ActivePiece.spawn(TetrominoType.LINE, 10)
    rotated = piece.rotated()
    assert rotated.offsets == ((0, 0), (1, 0), (2, 0), (3, 0))
    # four rotations come back to the start
    again = rotated.rotated().rotated().rotated()
    assert again.offsets == piece.offsets


def test_rotation_can_reach_rows_above_the_anchor():
    piece = ActivePiece.spawn(TetrominoType.T, 10).rotated()
    assert (1, -1) in piece.offsets
    assert (4, -1) in piece.cells()
