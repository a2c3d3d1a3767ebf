"""Perft tests, the reference check for move-generator correctness.

Reference values: https://www.chessprogramming.org/Perft_Results

Promotion is always to a queen, so only depths without promotions are
compared against the published tables.
"""

import pytest

from chessmate.core.enums import Color
from chessmate.core.layout import STARTING_LAYOUT, position_from_layout
from chessmate.core.move import Move
from chessmate.core.move_generator import MoveGenerator
from chessmate.core.position import Position
from chessmate.core.types import parse_square, square_name


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth* using make/unmake."""
    if depth == 0:
        return 1
    gen = MoveGenerator(position)
    moves = gen.legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        record = position.make_move(move)
        nodes += perft(position, depth - 1)
        position.unmake_move(move, record)
    return nodes


def _targets(pos: Position, name: str) -> set[str]:
    gen = MoveGenerator(pos)
    return {square_name(sq) for sq in gen.legal_targets(parse_square(name))}


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        pos = position_from_layout(STARTING_LAYOUT)
        assert perft(pos, 1) == 20

    def test_depth_2(self) -> None:
        pos = position_from_layout(STARTING_LAYOUT)
        assert perft(pos, 2) == 400

    def test_depth_3(self) -> None:
        pos = position_from_layout(STARTING_LAYOUT)
        assert perft(pos, 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        pos = position_from_layout(STARTING_LAYOUT)
        assert perft(pos, 4) == 197_281


# ── Kiwipete (castling, en passant, pins) ────────────────────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        pos = position_from_layout(KIWIPETE)
        assert perft(pos, 1) == 48

    def test_depth_2(self) -> None:
        pos = position_from_layout(KIWIPETE)
        assert perft(pos, 2) == 2_039


# ── Position 3: en passant and discovered checks along the rank ──────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        pos = position_from_layout(POS3)
        assert perft(pos, 1) == 14

    def test_depth_2(self) -> None:
        pos = position_from_layout(POS3)
        assert perft(pos, 2) == 191

    def test_depth_3(self) -> None:
        pos = position_from_layout(POS3)
        assert perft(pos, 3) == 2_812

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        pos = position_from_layout(POS3)
        assert perft(pos, 4) == 43_238


# ── Castling-only board ──────────────────────────────────────────────────────

ROOKS_AND_KINGS = "r3k2r/8/8/8/8/8/8/R3K2R"


class TestPerftCastling:
    def test_depth_1(self) -> None:
        pos = position_from_layout(ROOKS_AND_KINGS)
        assert perft(pos, 1) == 26

    def test_depth_2(self) -> None:
        pos = position_from_layout(ROOKS_AND_KINGS)
        assert perft(pos, 2) == 568


# ── Position 4: white in check ──────────────────────────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        pos = position_from_layout(POS4)
        assert perft(pos, 1) == 6


# ── Castling conditions ─────────────────────────────────────────────────────


class TestCastling:
    def test_both_sides_available(self) -> None:
        pos = position_from_layout(ROOKS_AND_KINGS)
        assert {"g1", "c1"} <= _targets(pos, "e1")

    def test_blocked_path(self) -> None:
        pos = position_from_layout("r3k2r/8/8/8/8/8/8/RN2K1NR")
        assert _targets(pos, "e1") & {"g1", "c1"} == set()

    def test_cannot_cross_attacked_square(self) -> None:
        # The black rook on f8 covers f1, which the king must pass.
        pos = position_from_layout("4kr2/8/8/8/8/8/8/R3K2R")
        targets = _targets(pos, "e1")
        assert "g1" not in targets
        assert "c1" in targets

    def test_b1_may_be_attacked_for_queenside(self) -> None:
        # Only the rook passes b1; the king crosses d1 and c1.
        pos = position_from_layout("1r2k3/8/8/8/8/8/8/R3K2R")
        assert "c1" in _targets(pos, "e1")

    def test_cannot_castle_out_of_check(self) -> None:
        pos = position_from_layout("4r1k1/8/8/8/8/8/8/R3K2R")
        assert _targets(pos, "e1") & {"g1", "c1"} == set()

    def test_cannot_land_in_check(self) -> None:
        pos = position_from_layout("6r1/4k3/8/8/8/8/8/R3K2R")
        targets = _targets(pos, "e1")
        assert "g1" not in targets
        assert "c1" in targets

    def test_moved_rook_forbids_castling(self) -> None:
        pos = position_from_layout(ROOKS_AND_KINGS)
        for move in ("h1h2", "h8h7", "h2h1", "h7h8"):
            pos.make_move(Move(parse_square(move[:2]), parse_square(move[2:])))
        targets = _targets(pos, "e1")
        assert "g1" not in targets
        assert "c1" in targets

    def test_moved_king_forbids_castling(self) -> None:
        pos = position_from_layout(ROOKS_AND_KINGS)
        for move in ("e1e2", "e8e7", "e2e1", "e7e8"):
            pos.make_move(Move(parse_square(move[:2]), parse_square(move[2:])))
        assert _targets(pos, "e1") & {"g1", "c1"} == set()

    def test_black_castles_too(self) -> None:
        pos = position_from_layout(ROOKS_AND_KINGS, Color.BLACK)
        assert {"g8", "c8"} <= _targets(pos, "e8")


# ── Pawns ────────────────────────────────────────────────────────────────────


class TestPawnMoves:
    def test_single_and_double_push(self) -> None:
        pos = position_from_layout(STARTING_LAYOUT)
        assert _targets(pos, "e2") == {"e3", "e4"}

    def test_double_push_blocked_by_intermediate(self) -> None:
        pos = position_from_layout("4k3/8/8/8/8/4n3/4P3/4K3")
        assert _targets(pos, "e2") == set()

    def test_double_push_blocked_on_landing(self) -> None:
        pos = position_from_layout("4k3/8/8/8/4n3/8/4P3/4K3")
        assert _targets(pos, "e2") == {"e3"}

    def test_diagonal_capture_only_of_enemy(self) -> None:
        pos = position_from_layout("4k3/8/8/8/8/3p1N2/4P3/4K3")
        assert _targets(pos, "e2") == {"e3", "e4", "d3"}

    def test_en_passant_only_right_after_double_push(self) -> None:
        pos = position_from_layout("4k3/3p4/8/4P3/8/8/8/4K3", Color.BLACK)
        pos.make_move(Move(parse_square("d7"), parse_square("d5")))
        assert "d6" in _targets(pos, "e5")

        pos.make_move(Move(parse_square("e1"), parse_square("e2")))
        pos.make_move(Move(parse_square("e8"), parse_square("e7")))
        assert "d6" not in _targets(pos, "e5")

    def test_en_passant_that_exposes_king_is_illegal(self) -> None:
        # Capturing removes both pawns from the fifth rank.
        pos = position_from_layout("4k3/3p4/8/K3P2r/8/8/8/8", Color.BLACK)
        pos.make_move(Move(parse_square("d7"), parse_square("d5")))
        assert "d6" not in _targets(pos, "e5")


# ── Check detection ─────────────────────────────────────────────────────────


class TestCheckDetection:
    def test_start_not_in_check(self) -> None:
        gen = MoveGenerator(position_from_layout(STARTING_LAYOUT))
        assert not gen.is_in_check(Color.WHITE)
        assert not gen.is_in_check(Color.BLACK)

    def test_knight_check(self) -> None:
        gen = MoveGenerator(position_from_layout("4k3/8/3N4/8/8/8/8/4K3"))
        assert gen.is_in_check(Color.BLACK)

    def test_pawn_check_direction(self) -> None:
        gen = MoveGenerator(position_from_layout("4k3/3P4/8/8/8/8/3p4/4K3"))
        assert gen.is_in_check(Color.BLACK)
        assert gen.is_in_check(Color.WHITE)

    def test_pawn_behind_does_not_check(self) -> None:
        gen = MoveGenerator(position_from_layout("8/8/3P4/4k3/8/8/8/4K3"))
        assert not gen.is_in_check(Color.BLACK)
        gen = MoveGenerator(position_from_layout("8/8/8/3P4/4k3/8/8/4K3"))
        assert not gen.is_in_check(Color.BLACK)

    def test_slider_blocked(self) -> None:
        gen = MoveGenerator(position_from_layout("4k3/4p3/8/8/8/8/8/4RK2"))
        assert not gen.is_in_check(Color.BLACK)

    def test_missing_king_is_not_in_check(self) -> None:
        gen = MoveGenerator(position_from_layout("8/8/8/8/8/8/8/R3K3"))
        assert not gen.is_in_check(Color.BLACK)

    def test_square_attacked_by_queen_diagonal(self) -> None:
        gen = MoveGenerator(position_from_layout("4k3/8/8/8/8/8/8/Q3K3"))
        assert gen.is_square_attacked(parse_square("h8"), Color.WHITE)
        assert not gen.is_square_attacked(parse_square("b3"), Color.WHITE)


# ── Legality filter ─────────────────────────────────────────────────────────


class TestLegality:
    def test_pinned_piece_moves_along_pin_only(self) -> None:
        pos = position_from_layout("4r1k1/8/8/8/8/8/4R3/4K3")
        assert _targets(pos, "e2") == {"e3", "e4", "e5", "e6", "e7", "e8"}

    def test_king_cannot_step_into_check(self) -> None:
        pos = position_from_layout("3r2k1/8/8/8/8/8/8/4K3")
        assert "d1" not in _targets(pos, "e1")
        assert "d2" not in _targets(pos, "e1")

    def test_legal_moves_subset_of_pseudo_legal(self) -> None:
        pos = position_from_layout(KIWIPETE)
        gen = MoveGenerator(pos)
        assert set(gen.legal_moves()) <= set(gen.pseudo_legal_moves())

    def test_generation_restores_position(self) -> None:
        pos = position_from_layout(KIWIPETE)
        before = pos.copy()
        MoveGenerator(pos).legal_moves()
        assert pos == before

    def test_has_any_legal_move_matches_list(self) -> None:
        for layout, side in (
            (STARTING_LAYOUT, Color.WHITE),
            ("7k/8/5KQ1/8/8/8/8/8", Color.BLACK),
        ):
            gen = MoveGenerator(position_from_layout(layout, side))
            assert gen.has_any_legal_move() == bool(gen.legal_moves())

    def test_empty_square_has_no_targets(self) -> None:
        gen = MoveGenerator(position_from_layout(STARTING_LAYOUT))
        assert gen.legal_targets(parse_square("e4")) == []
