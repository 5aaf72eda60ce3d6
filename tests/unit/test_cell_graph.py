"""
Unit tests for the lattice cell graph.
"""

import pytest

from tilevox.core.cell_graph import CellGraph, Edge
from tilevox.core.direction import Direction


class TestCellIds:
    """Tests for id/position conversion."""

    def test_len(self):
        assert len(CellGraph(3, 4, 5)) == 60

    def test_x_runs_fastest(self):
        graph = CellGraph(3, 4, 5)
        assert graph.cell_id(0, 0, 0) == 0
        assert graph.cell_id(1, 0, 0) == 1
        assert graph.cell_id(0, 1, 0) == 3
        assert graph.cell_id(0, 0, 1) == 12

    def test_position_roundtrip(self):
        graph = CellGraph(3, 4, 5)
        for cell_id, position in enumerate(graph.positions()):
            assert graph.position(cell_id) == position
            assert graph.cell_id(*position) == cell_id

    def test_out_of_bounds(self):
        graph = CellGraph(2, 2, 2)
        with pytest.raises(IndexError):
            graph.cell_id(2, 0, 0)
        with pytest.raises(IndexError):
            graph.position(8)

    @pytest.mark.parametrize("dims", [(0, 1, 1), (1, 0, 1), (1, 1, -2)])
    def test_non_positive_dimensions(self, dims):
        with pytest.raises(ValueError, match="positive"):
            CellGraph(*dims)


class TestEdges:
    """Tests for edge lists and boundaries."""

    def test_interior_cell_has_six_edges(self):
        graph = CellGraph(3, 3, 3)
        center = graph.cell_id(1, 1, 1)
        assert len(graph.edges[center]) == 6

    def test_corner_cell_has_three_edges(self):
        graph = CellGraph(3, 3, 3)
        directions = {edge.direction for edge in graph.edges[0]}
        assert directions == {Direction.EAST, Direction.NORTH, Direction.UP}

    def test_no_wraparound(self):
        graph = CellGraph(3, 1, 1)
        assert graph.neighbor(0, Direction.WEST) is None
        assert graph.neighbor(2, Direction.EAST) is None

    def test_edges_point_at_neighbors(self):
        graph = CellGraph(3, 3, 3)
        center = graph.cell_id(1, 1, 1)
        assert Edge(Direction.UP, graph.cell_id(1, 1, 2)) in graph.edges[center]
        assert Edge(Direction.SOUTH, graph.cell_id(1, 0, 1)) in graph.edges[center]

    def test_edges_are_symmetric(self):
        graph = CellGraph(3, 2, 2)
        for cell_id, edges in enumerate(graph.edges):
            for edge in edges:
                back = graph.neighbor(edge.cell_id, edge.direction.opposite())
                assert back == cell_id

    def test_single_cell_has_no_edges(self):
        graph = CellGraph(1, 1, 1)
        assert graph.edges == [()]
        assert graph.diagonals == [()]

    def test_diagonals(self):
        graph = CellGraph(3, 3, 1)
        center = graph.cell_id(1, 1, 0)
        assert len(graph.diagonals[center]) == 4
        assert graph.neighbor(center, Direction.NORTH_EAST) == graph.cell_id(2, 2, 0)
        assert len(graph.diagonals[0]) == 1

    def test_column(self, column_graph):
        assert column_graph.edges[0] == (Edge(Direction.UP, 1),)
        assert column_graph.edges[1] == (Edge(Direction.DOWN, 0),)


class TestSeedPosition:
    """Tests for the seed cell."""

    def test_center_of_bottom_layer(self):
        graph = CellGraph(8, 8, 8)
        assert graph.seed_position == (4, 4, 0)
        assert graph.seed_cell_id == graph.cell_id(4, 4, 0)

    def test_odd_and_single_dimensions(self):
        assert CellGraph(3, 5, 2).seed_position == (1, 2, 0)
        assert CellGraph(1, 1, 2).seed_cell_id == 0
