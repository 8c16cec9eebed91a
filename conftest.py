import random

import matplotlib
import pytest

from cophy.EdgeTree import EdgeListTree, ParasiteTree


def pytest_configure(config):
    """Draw figures without a display."""
    matplotlib.use("Agg")


def makeRandomTree(numTips, seed, rootEdge=None):
    """
    Build a random binary tree in temporal node order. Each split
    happens on a randomly chosen living lineage at increasing times,
    and every tip ends at the same time.
    """
    rng = random.Random(seed)
    splitTimeL = sorted(rng.uniform(0, 1) for _ in range(numTips - 2))
    endTime = 1.0 + rng.uniform(0, 1)

    rootNode = numTips + 1
    timeD = {rootNode: 0.0}
    edgeL = [[rootNode, None], [rootNode, None]]
    liveL = [0, 1]
    nextNode = rootNode + 1
    for splitTime in splitTimeL:
        edge = liveL.pop(rng.randrange(len(liveL)))
        edgeL[edge][1] = nextNode
        timeD[nextNode] = splitTime
        for _ in range(2):
            edgeL.append([nextNode, None])
            liveL.append(len(edgeL) - 1)
        nextNode += 1
    for tip, edge in enumerate(liveL, 1):
        edgeL[edge][1] = tip
        timeD[tip] = endTime

    branchLenL = [timeD[child] - timeD[parent] for parent, child in edgeL]
    return EdgeListTree([tuple(e) for e in edgeL], branchLenL, rootEdge)


def makeRandomParasite(numTips, hostTreeO, seed, rootEdge=None):
    """A random parasite tree with random host associations."""
    shapeO = makeRandomTree(numTips, seed, rootEdge)
    rng = random.Random(seed + 1)
    hostAssocL = [rng.randrange(hostTreeO.edgeCount()) for _ in shapeO.edgeT]
    return ParasiteTree(shapeO.edgeT, shapeO.branchLenT, hostAssocL, rootEdge)


@pytest.fixture
def twoTipHost():
    return EdgeListTree([(3, 1), (3, 2)], [3, 4])


@pytest.fixture
def hostTreeO():
    """
    Four tip host. Root 5 splits at time 0, node 6 at 1, node 7 at 2.

        edge 0 (5,6) 1.0    edge 1 (5,4) 3.0
        edge 2 (6,1) 2.0    edge 3 (6,7) 1.0
        edge 4 (7,2) 1.0    edge 5 (7,3) 1.0
    """
    return EdgeListTree([(5, 6), (5, 4), (6, 1), (6, 7), (7, 2), (7, 3)], [1.0, 3.0, 2.0, 1.0, 1.0, 1.0])


@pytest.fixture
def parasiteTreeO():
    """
    Four tip parasite on hostTreeO. Node 6 at time 0.5 keeps its first
    daughter on host edge 0, node 7 at 1.5 moves its first daughter
    from host edge 1 to host edge 2.
    """
    edgeL = [(5, 6), (5, 4), (6, 1), (6, 7), (7, 2), (7, 3)]
    branchLenL = [0.5, 3.0, 2.5, 1.0, 1.5, 1.5]
    hostAssocL = [0, 1, 0, 1, 2, 3]
    return ParasiteTree(edgeL, branchLenL, hostAssocL)


@pytest.fixture
def rootedHostTreeO(hostTreeO):
    return EdgeListTree(hostTreeO.edgeT, hostTreeO.branchLenT, rootEdge=0.5)


@pytest.fixture
def rootedParasiteTreeO(parasiteTreeO):
    return ParasiteTree(parasiteTreeO.edgeT, parasiteTreeO.branchLenT, parasiteTreeO.hostAssocT, rootEdge=0.5)
