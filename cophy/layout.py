"""
Layout of a cophylogeny: turns a host tree and a parasite tree living
on it into horizontal branch lines and vertical connector lines.

Time runs along x. The host tree is laid out first, giving every host
branch a row (y). Parasite branches never get rows of their own, they
take the row of the host branch they are associated with, so a
parasite lineage is always drawn on top of its host. A parasite
connector whose first daughter is on a different host than its mother
is flagged as a host jump.

Typical use:
    layoutO = layoutCophylogeny(hostTreeO, parasiteTreeO)
    for branchLine in layoutO.hostBranches:
        ...
"""
import sys
from typing import NamedTuple, Tuple
from .EdgeTree import DegenerateTreeError

## Globals

X_SHIFT_FRACTION = 1 / 1000  # parasite x offset as a fraction of host tree extent
Y_SHIFT = 0.1                # parasite y offset

## Line types

class BranchLine(NamedTuple):
    x1: float
    x2: float
    y: float

class ConnectorLine(NamedTuple):
    x: float
    y1: float
    y2: float

class ParasiteConnectorLine(NamedTuple):
    x: float
    y1: float
    y2: float
    hostJump: bool

class CophyLayout(NamedTuple):
    hostBranches: Tuple[BranchLine, ...]
    hostConnectors: Tuple[ConnectorLine, ...]
    parasiteBranches: Tuple[BranchLine, ...]
    parasiteConnectors: Tuple[ParasiteConnectorLine, ...]

## Layout functions

def layoutCophylogeny(hostTreeO, parasiteTreeO, xShiftFraction=X_SHIFT_FRACTION, yShift=Y_SHIFT):
    """
    Lay out a host tree and the parasite tree living on it.
    :param hostTreeO: EdgeListTree for the host
    :param parasiteTreeO: ParasiteTree whose associations index host edges
    :param xShiftFraction: fraction of the host extent the parasite is shifted right by when there is a root edge
    :param yShift: amount the parasite is shifted up by when there is a root edge
    :return CophyLayout
    """
    hostTreeO.check()
    parasiteTreeO.check()
    parasiteTreeO.checkAssociation(hostTreeO)
    if parasiteTreeO.isStemOnly() and hostTreeO.rootEdge == None:
        raise DegenerateTreeError("A parasite tree with no splits can only be placed on a host tree with a root edge.")

    hostBranchT, hostConnectorT = hostLayout(hostTreeO)
    parasiteBranchT, parasiteConnectorT = parasiteLayout(parasiteTreeO, hostBranchT)
    layoutO = CophyLayout(hostBranchT, hostConnectorT, parasiteBranchT, parasiteConnectorT)

    if hostTreeO.rootEdge != None:
        layoutO = adjustForRoot(layoutO, hostTreeO, parasiteTreeO, xShiftFraction, yShift)
    return layoutO


def hostLayout(hostTreeO):
    """
    Give every host branch a time range and a row. Branch lines are
    indexed like hostTreeO.edgeT, connectors are in internal node order.
    Assumes hostTreeO.check() has passed.
    :param hostTreeO: EdgeListTree for the host
    :return (tuple of BranchLine, tuple of ConnectorLine)
    """
    if hostTreeO.isStemOnly():
        return (), ()

    numEdges = hostTreeO.edgeCount()
    branchLenT = hostTreeO.branchLenT
    x1L = [None] * numEdges
    x2L = [None] * numEdges
    yL = [None] * numEdges
    placedL = []  # edges that have a row so far

    rootNode = hostTreeO.rootNode()
    for row, edge in enumerate(hostTreeO.daughterEdges(rootNode)):
        x1L[edge] = 0.0
        x2L[edge] = branchLenT[edge]
        yL[edge] = float(row)
        placedL.append(edge)

    for node in hostTreeO.internals()[1:]:
        motherEdge = hostTreeO.motherEdge(node)
        startTime = x2L[motherEdge]
        motherY = yL[motherEdge]

        # make room for a new row just above the mother
        for edge in placedL:
            if yL[edge] >= motherY + 1:
                yL[edge] += 1

        for offset, edge in enumerate(hostTreeO.daughterEdges(node)):
            x1L[edge] = startTime
            x2L[edge] = startTime + branchLenT[edge]
            yL[edge] = motherY + offset
            placedL.append(edge)

        # recentre the mother and all its ancestors on their daughters
        edge = motherEdge
        while edge != None:
            daughter1, daughter2 = hostTreeO.daughterEdges(hostTreeO.edgeT[edge][1])
            yL[edge] = (yL[daughter1] + yL[daughter2]) / 2
            edge = hostTreeO.parentEdge(edge)

    branchT = tuple(BranchLine(x1L[edge], x2L[edge], yL[edge]) for edge in range(numEdges))
    connectorL = []
    for node in hostTreeO.internals():
        daughter1, daughter2 = hostTreeO.daughterEdges(node)
        connectorL.append(ConnectorLine(x1L[daughter1], yL[daughter1], yL[daughter2]))
    return branchT, tuple(connectorL)


def parasiteLayout(parasiteTreeO, hostBranchT):
    """
    Give every parasite branch a time range and the row of its host
    branch. Assumes parasiteTreeO has been checked against the host tree.
    :param parasiteTreeO: ParasiteTree
    :param hostBranchT: host branch lines from hostLayout, before any root adjustment
    :return (tuple of BranchLine, tuple of ParasiteConnectorLine)
    """
    if parasiteTreeO.isStemOnly():
        return (), ()

    numEdges = parasiteTreeO.edgeCount()
    branchLenT = parasiteTreeO.branchLenT
    hostAssocT = parasiteTreeO.hostAssocT
    x1L = [None] * numEdges
    x2L = [None] * numEdges

    for edge in parasiteTreeO.daughterEdges(parasiteTreeO.rootNode()):
        x1L[edge] = 0.0
        x2L[edge] = branchLenT[edge]

    for node in parasiteTreeO.internals()[1:]:
        startTime = x2L[parasiteTreeO.motherEdge(node)]
        for edge in parasiteTreeO.daughterEdges(node):
            x1L[edge] = startTime
            x2L[edge] = startTime + branchLenT[edge]

    branchT = tuple(BranchLine(x1L[edge], x2L[edge], hostBranchT[hostAssocT[edge]].y) for edge in range(numEdges))

    connectorL = []
    for position, node in enumerate(parasiteTreeO.internals()):
        daughter1, daughter2 = parasiteTreeO.daughterEdges(node)
        if position == 0:
            hostJump = False
        else:
            hostJump = hostAssocT[daughter1] != hostAssocT[parasiteTreeO.motherEdge(node)]
        connectorL.append(ParasiteConnectorLine(x1L[daughter1], branchT[daughter1].y, branchT[daughter2].y, hostJump))
    return branchT, tuple(connectorL)


def adjustForRoot(layoutO, hostTreeO, parasiteTreeO, xShiftFraction=X_SHIFT_FRACTION, yShift=Y_SHIFT):
    """
    Add stems to a layout whose host tree has a root edge. Everything
    moves right by the length of its own tree's stem, the stems are put
    in front of the branch lines, and the parasite is nudged right and
    up so it doesn't hide the host.

    No connector is added for the host stem. The root connector, shifted
    to the end of the stem, already joins the stem to the root's
    daughters, so there are still T-1 host connectors. A parasite stem
    is only drawn when the parasite has a rootEdge; without one its
    rootHostAssoc is ignored.
    :param layoutO: CophyLayout without stems
    :param hostTreeO: EdgeListTree for the host, rootEdge must not be None
    :param parasiteTreeO: ParasiteTree
    :return CophyLayout
    """
    hostBranchT, hostConnectorT = _addHostStem(layoutO.hostBranches, layoutO.hostConnectors, hostTreeO.rootEdge)
    hostStemY = hostBranchT[0].y

    parasiteStem = parasiteTreeO.rootEdge if parasiteTreeO.rootEdge != None else 0.0
    parasiteBranchL = [BranchLine(b.x1 + parasiteStem, b.x2 + parasiteStem, b.y) for b in layoutO.parasiteBranches]
    parasiteConnectorL = [c._replace(x=c.x + parasiteStem) for c in layoutO.parasiteConnectors]
    if parasiteTreeO.rootEdge != None:
        if parasiteTreeO.rootHostAssoc == None:
            rootY = hostStemY
        else:
            rootY = layoutO.hostBranches[parasiteTreeO.rootHostAssoc].y
        parasiteBranchL.insert(0, BranchLine(0.0, parasiteStem, rootY))

    # the offset only moves the parasite as a whole, so rows keep their order
    xShift = max(b.x2 for b in hostBranchT) * xShiftFraction + parasiteTreeO.rootTime
    parasiteBranchT = tuple(BranchLine(b.x1 + xShift, b.x2 + xShift, b.y + yShift) for b in parasiteBranchL)
    parasiteConnectorT = tuple(ParasiteConnectorLine(c.x + xShift, c.y1 + yShift, c.y2 + yShift, c.hostJump) for c in parasiteConnectorL)

    return CophyLayout(hostBranchT, hostConnectorT, parasiteBranchT, parasiteConnectorT)


def _addHostStem(branchT, connectorT, rootEdge):
    """Shift host lines right by rootEdge and put the stem first."""
    if len(branchT) >= 2:
        stemY = (branchT[0].y + branchT[1].y) / 2
    else:
        stemY = 0.0
    stem = BranchLine(0.0, rootEdge, stemY)
    shiftedBranchT = tuple(BranchLine(b.x1 + rootEdge, b.x2 + rootEdge, b.y) for b in branchT)
    shiftedConnectorT = tuple(c._replace(x=c.x + rootEdge) for c in connectorT)
    return (stem,) + shiftedBranchT, shiftedConnectorT

## Output

def layoutBounds(layoutO):
    '''Return (xMin,xMax,yMin,yMax) of the host lines. This is the
drawing window, parasite lines lie inside it or just beyond the top
and right edges.'''
    xL = []
    yL = []
    for b in layoutO.hostBranches:
        xL.extend((b.x1, b.x2))
        yL.append(b.y)
    return min(xL), max(xL), min(yL), max(yL)

def printLayout(layoutO, fileF=sys.stdout):
    '''Print the four collections of lines in layoutO as tab separated
rows. The first field says which collection a row comes from.'''
    print("hostBranch\tx1\tx2\ty", file=fileF)
    for b in layoutO.hostBranches:
        print("hostBranch", b.x1, b.x2, b.y, sep="\t", file=fileF)
    print("hostConnector\tx\ty1\ty2", file=fileF)
    for c in layoutO.hostConnectors:
        print("hostConnector", c.x, c.y1, c.y2, sep="\t", file=fileF)
    print("parasiteBranch\tx1\tx2\ty", file=fileF)
    for b in layoutO.parasiteBranches:
        print("parasiteBranch", b.x1, b.x2, b.y, sep="\t", file=fileF)
    print("parasiteConnector\tx\ty1\ty2\thostJump", file=fileF)
    for c in layoutO.parasiteConnectors:
        print("parasiteConnector", c.x, c.y1, c.y2, c.hostJump, sep="\t", file=fileF)
