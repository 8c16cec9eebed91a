import io

import pytest
from Bio import Phylo

from cophy import trees
from cophy.EdgeTree import EdgeListTree, ParasiteTree, MalformedTreeError
from cophy.layout import layoutCophylogeny
from conftest import makeRandomTree


############################################################
# Native format
############################################################


def test_host_from_string():
    treeO = trees.edgeTreeFromString("0.5|3 1 3.0,3 2 4.0\n")
    assert treeO == EdgeListTree([(3, 1), (3, 2)], [3.0, 4.0], rootEdge=0.5)


def test_parasite_from_string():
    treeO = trees.parasiteTreeFromString("None|3 1 1.0 1,3 2 2.5 0|0.25|None")
    assert treeO == ParasiteTree([(3, 1), (3, 2)], [1.0, 2.5], [1, 0], rootTime=0.25)


def test_string_round_trip(hostTreeO, parasiteTreeO):
    assert trees.edgeTreeFromString(hostTreeO.fileStr()) == hostTreeO
    assert trees.parasiteTreeFromString(parasiteTreeO.fileStr()) == parasiteTreeO


def test_stem_only_from_string():
    treeO = trees.edgeTreeFromString("2.0|")
    assert treeO.isStemOnly()


@pytest.mark.parametrize(
    "treeStr",
    ["3 1 3.0,3 2 4.0", "None|3 1 3.0,3 2", "None|3 1 3.0 0,3 2 4.0 1"],
)
def test_bad_host_strings(treeStr):
    with pytest.raises(MalformedTreeError):
        trees.edgeTreeFromString(treeStr)


def test_bad_parasite_string():
    with pytest.raises(MalformedTreeError):
        trees.parasiteTreeFromString("None|3 1 1.0,3 2 2.5|0.0|None")


def test_cophylogeny_file(tmp_path, rootedHostTreeO, parasiteTreeO):
    cophyFN = str(tmp_path / "test.cophy")
    trees.writeCophylogeny(cophyFN, rootedHostTreeO, parasiteTreeO)
    hostO, parasiteO = trees.readCophylogeny(cophyFN)
    assert hostO == rootedHostTreeO
    assert parasiteO == parasiteTreeO


def test_cophylogeny_file_needs_two_trees(tmp_path):
    cophyFN = tmp_path / "one.cophy"
    cophyFN.write_text("# only a host\n\nNone|3 1 3.0,3 2 4.0\n")
    with pytest.raises(MalformedTreeError):
        trees.readCophylogeny(str(cophyFN))


############################################################
# Biopython conversion
############################################################


def test_to_bio_phylo(rootedHostTreeO):
    bpTree = trees.edgeTreeToBioPhylo(rootedHostTreeO)
    assert bpTree.rooted
    assert bpTree.root.branch_length == 0.5
    assert bpTree.root.name == "n5"
    assert [c.name for c in bpTree.get_terminals()] == ["t1", "t2", "t3", "t4"]
    assert bpTree.distance("t2") == pytest.approx(3.0)
    assert bpTree.is_bifurcating()


def test_to_bio_phylo_tip_names(twoTipHost):
    bpTree = trees.edgeTreeToBioPhylo(twoTipHost, ("A", "B"))
    assert [c.name for c in bpTree.get_terminals()] == ["A", "B"]
    assert bpTree.root.branch_length is None


def test_from_bio_phylo():
    bpTree = Phylo.read(io.StringIO("((A:2.0,(B:1.0,C:1.0):1.0):1.0,D:3.0):0.5;"), "newick", rooted=True)
    treeO, tipNameT = trees.bioPhyloToEdgeTree(bpTree)
    assert tipNameT == ("A", "B", "C", "D")
    assert treeO == EdgeListTree(
        [(5, 6), (5, 4), (6, 1), (6, 7), (7, 2), (7, 3)], [1.0, 3.0, 2.0, 1.0, 1.0, 1.0], rootEdge=0.5
    )
    treeO.check()


def test_from_bio_phylo_numbers_internal_nodes_by_time():
    # the right hand clade splits first
    bpTree = Phylo.read(io.StringIO("((A:1.0,B:1.0):2.0,(C:2.5,D:2.5):0.5);"), "newick", rooted=True)
    treeO, tipNameT = trees.bioPhyloToEdgeTree(bpTree)
    treeO.check()
    assert treeO.rootEdge is None
    assert treeO.edgeT == ((5, 7), (5, 6), (6, 3), (6, 4), (7, 1), (7, 2))
    assert treeO.nodeTimes()[6] == 0.5
    assert treeO.nodeTimes()[7] == 2.0


def test_bio_phylo_round_trip():
    treeO = makeRandomTree(15, 3, rootEdge=0.2)
    newTreeO, tipNameT = trees.bioPhyloToEdgeTree(trees.edgeTreeToBioPhylo(treeO))
    newTreeO.check()
    assert newTreeO.leafCount() == treeO.leafCount()
    assert newTreeO.rootEdge == treeO.rootEdge
    assert sorted(newTreeO.nodeTimes().values()) == pytest.approx(sorted(treeO.nodeTimes().values()))


@pytest.mark.parametrize(
    "newickStr",
    ["(A:1.0,B:1.0,C:1.0);", "((A:1.0,B:1.0,C:1.0):1.0,D:2.0);", "((A,B):1.0,C:2.0);"],
)
def test_from_bio_phylo_rejects(newickStr):
    bpTree = Phylo.read(io.StringIO(newickStr), "newick", rooted=True)
    with pytest.raises(MalformedTreeError):
        trees.bioPhyloToEdgeTree(bpTree)


def test_newick_file(tmp_path):
    treeFN = tmp_path / "host.tre"
    treeFN.write_text("((A:2.0,(B:1.0,C:1.0):1.0):1.0,D:3.0):0.5;\n")
    treeO, tipNameT = trees.readNewickTree(str(treeFN))
    assert treeO.leafCount() == 4
    assert tipNameT == ("A", "B", "C", "D")


def test_newick_string_round_trip(rootedHostTreeO):
    newickStr = trees.toNewickStr(rootedHostTreeO, ("A", "B", "C", "D"))
    bpTree = Phylo.read(io.StringIO(newickStr), "newick", rooted=True)
    treeO, tipNameT = trees.bioPhyloToEdgeTree(bpTree)
    assert tipNameT == ("A", "B", "C", "D")
    assert treeO == rootedHostTreeO


def test_newick_string_round_trip_without_stem(hostTreeO, parasiteTreeO):
    newickStr = trees.toNewickStr(hostTreeO)
    assert newickStr.endswith(")n5;")
    treeO, tipNameT = trees.bioPhyloToEdgeTree(Phylo.read(io.StringIO(newickStr), "newick", rooted=True))
    assert treeO.rootEdge is None
    assert treeO == hostTreeO
    assert layoutCophylogeny(treeO, parasiteTreeO) == layoutCophylogeny(hostTreeO, parasiteTreeO)


def test_newick_string_keeps_branch_length_precision():
    treeO = makeRandomTree(12, 5, rootEdge=0.1)
    newickStr = trees.toNewickStr(treeO)
    newTreeO, tipNameT = trees.bioPhyloToEdgeTree(Phylo.read(io.StringIO(newickStr), "newick", rooted=True))
    newTreeO.check()
    assert newTreeO.rootEdge == treeO.rootEdge
    assert sorted(newTreeO.branchLenT) == sorted(treeO.branchLenT)
