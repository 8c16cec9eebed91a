import math

## Globals

# relative slack allowed when comparing node times computed by
# summing branch lengths
TIME_ORDER_TOLERANCE = 1e-9

## Errors

class MalformedTreeError(ValueError):
    '''Raised when an edge list is not a binary tree with internal node
ids in temporal order.'''
    pass

class InconsistentAssociationError(ValueError):
    '''Raised when a parasite tree refers to host branches that don't
exist.'''
    pass

class DegenerateTreeError(ValueError):
    '''Raised for trees with too few edges to lay out.'''
    pass

## Classes

class EdgeListTree:
    def __init__(self,edgeT,branchLenT,rootEdge=None):
        '''A rooted binary tree stored as an edge list. edgeT is a tuple
of (parent,child) pairs of integer node ids and branchLenT is a
parallel tuple of branch lengths. Tips are numbered 1..T and internal
nodes T+1..2T-1, with the root at T+1. Internal node ids are expected
to be in temporal order, so a node's id is larger than its parent's
and the time of nodes never decreases with id. rootEdge is the length
of the stem leading to the root, or None if there is no stem.

Nothing is verified here, call check() for that. An empty edge list
with a rootEdge is a single lineage that never splits.
        '''
        self.edgeT = tuple((int(parent),int(child)) for parent,child in edgeT)
        self.branchLenT = tuple(float(brLen) for brLen in branchLenT)
        self.rootEdge = None if rootEdge == None else float(rootEdge)
        self.__updateSecondaryAttributes__()

    def __updateSecondaryAttributes__(self):
        '''Create the lookups from nodes to the edges touching them.'''
        parentToEdgesD = {}
        childToEdgesD = {}
        for edge,(parent,child) in enumerate(self.edgeT):
            parentToEdgesD.setdefault(parent,[]).append(edge)
            childToEdgesD.setdefault(child,[]).append(edge)
        self.parentToEdgesD = {node:tuple(L) for node,L in parentToEdgesD.items()}
        self.childToEdgesD = {node:tuple(L) for node,L in childToEdgesD.items()}

    def edgeCount(self):
        return len(self.edgeT)

    def leafCount(self):
        return len(self.edgeT) // 2 + 1

    def isStemOnly(self):
        '''True if this tree is a single unsplit lineage.'''
        return len(self.edgeT) == 0 and self.rootEdge != None

    def rootNode(self):
        if self.isStemOnly():
            return 1
        return self.leafCount() + 1

    def leaves(self):
        return tuple(range(1,self.leafCount()+1))

    def internals(self):
        '''Internal nodes in increasing id (and so temporal) order.'''
        if self.isStemOnly():
            return ()
        return tuple(range(self.leafCount()+1,2*self.leafCount()))

    def isLeaf(self,node):
        return node not in self.parentToEdgesD

    def daughterEdges(self,node):
        '''Indices of the edges leaving node, in edge list order.'''
        return self.parentToEdgesD.get(node,())

    def motherEdge(self,node):
        '''Index of the edge leading to node, None for the root.'''
        edgesT = self.childToEdgesD.get(node)
        if edgesT == None:
            return None
        return edgesT[0]

    def parentEdge(self,edge):
        '''Index of the edge leading to the start of edge, None if edge
leaves the root.'''
        return self.motherEdge(self.edgeT[edge][0])

    def nodeTimes(self):
        '''Return a dict keyed by node giving its time measured from the
root. Assumes check() has passed.'''
        timeD = {self.rootNode():0.0}
        for node in self.internals():
            for edge in self.daughterEdges(node):
                timeD[self.edgeT[edge][1]] = timeD[node] + self.branchLenT[edge]
        return timeD

    def depth(self):
        '''Time from the root to the latest node, not counting the stem.'''
        return max(self.nodeTimes().values())

    def check(self):
        '''Verify that this is a binary tree in temporal node order. Raise
DegenerateTreeError if there are too few edges, or MalformedTreeError
for any other problem. Returns None.
        '''
        numEdges = len(self.edgeT)
        if len(self.branchLenT) != numEdges:
            raise MalformedTreeError("There are "+str(numEdges)+" edges but "+str(len(self.branchLenT))+" branch lengths.")
        if self.rootEdge != None and not (math.isfinite(self.rootEdge) and self.rootEdge >= 0):
            raise MalformedTreeError("The root edge length must be a non-negative number, got "+str(self.rootEdge)+".")
        if self.isStemOnly():
            return
        if numEdges < 2:
            raise DegenerateTreeError("A tree needs at least two edges to be laid out, this one has "+str(numEdges)+".")
        if numEdges % 2 != 0:
            raise MalformedTreeError("A binary tree has an even number of edges, this one has "+str(numEdges)+".")

        for brLen in self.branchLenT:
            if not (math.isfinite(brLen) and brLen >= 0):
                raise MalformedTreeError("Branch lengths must be non-negative numbers, got "+str(brLen)+".")

        numTips = self.leafCount()
        numNodes = 2 * numTips - 1
        rootNode = self.rootNode()
        for parent,child in self.edgeT:
            if not (1 <= parent <= numNodes and 1 <= child <= numNodes):
                raise MalformedTreeError("Edge ("+str(parent)+","+str(child)+") refers to a node outside 1.."+str(numNodes)+".")
            if parent <= numTips:
                raise MalformedTreeError("Tip "+str(parent)+" has a child.")
            if child > numTips and child <= parent:
                raise MalformedTreeError("Internal node "+str(child)+" does not have a larger id than its parent "+str(parent)+", so node ids are not in temporal order.")

        for node in self.internals():
            if len(self.daughterEdges(node)) != 2:
                raise MalformedTreeError("Internal node "+str(node)+" has "+str(len(self.daughterEdges(node)))+" children, expected 2.")
        if self.daughterEdges(rootNode) != (0,1):
            raise MalformedTreeError("The two edges leaving the root must come first in the edge list.")

        if rootNode in self.childToEdgesD:
            raise MalformedTreeError("The root "+str(rootNode)+" is the child of an edge.")
        for node in range(1,numNodes+1):
            if node == rootNode:
                continue
            numParents = len(self.childToEdgesD.get(node,()))
            if numParents != 1:
                raise MalformedTreeError("Node "+str(node)+" has "+str(numParents)+" parents, expected 1.")

        timeD = self.nodeTimes()
        slack = TIME_ORDER_TOLERANCE * max(1.0,max(timeD.values()))
        internalT = self.internals()
        for previous,node in zip(internalT,internalT[1:]):
            if timeD[node] < timeD[previous] - slack:
                raise MalformedTreeError("Internal node "+str(node)+" is earlier than node "+str(previous)+", so node ids are not in temporal order.")

    def edgeInfoStr(self,edge):
        parent,child = self.edgeT[edge]
        return str(parent)+" "+str(child)+" "+repr(self.branchLenT[edge])

    def fileStr(self):
        '''Return a string representation of the tree. Outer separator is "|".

        rootEdge | edge info

        Each edge is "parent child length", with different edges
        separated by commas. rootEdge is None if there is no stem.
        '''
        edgeInfoStr = ",".join(self.edgeInfoStr(edge) for edge in range(len(self.edgeT)))
        return str(self.rootEdge)+"|"+edgeInfoStr

    def __eq__(self,other):
        if type(self) != type(other):
            return False
        return self.edgeT == other.edgeT and self.branchLenT == other.branchLenT and self.rootEdge == other.rootEdge

    def __repr__(self):
        return "EdgeListTree: "+self.fileStr()

class ParasiteTree(EdgeListTree):
    def __init__(self,edgeT,branchLenT,hostAssocT,rootEdge=None,rootTime=0.0,rootHostAssoc=None):
        '''A parasite tree in edge list form. hostAssocT is parallel to
edgeT and gives, for each parasite edge, the index of the host edge it
occupies when it starts. rootTime is the time on the host time axis
when the parasite arrived. rootHostAssoc is the index of the host edge
holding the parasite stem, or None if the stem sits on the host stem.
        '''
        super().__init__(edgeT,branchLenT,rootEdge)
        self.hostAssocT = tuple(int(hostEdge) for hostEdge in hostAssocT)
        self.rootTime = float(rootTime)
        self.rootHostAssoc = None if rootHostAssoc == None else int(rootHostAssoc)

    def check(self):
        '''Verify the tree as for EdgeListTree, and that rootTime is a
finite number. Raise MalformedTreeError if not.'''
        super().check()
        if not math.isfinite(self.rootTime):
            raise MalformedTreeError("The parasite root time must be a finite number, got "+str(self.rootTime)+".")

    def checkAssociation(self,hostTreeO):
        '''Verify that every host edge we refer to exists in
hostTreeO. Raise InconsistentAssociationError if not.'''
        if len(self.hostAssocT) != len(self.edgeT):
            raise InconsistentAssociationError("There are "+str(len(self.edgeT))+" parasite edges but "+str(len(self.hostAssocT))+" host associations.")
        numHostEdges = hostTreeO.edgeCount()
        for edge,hostEdge in enumerate(self.hostAssocT):
            if not 0 <= hostEdge < numHostEdges:
                raise InconsistentAssociationError("Parasite edge "+str(edge)+" is associated with host edge "+str(hostEdge)+", but the host tree has "+str(numHostEdges)+" edges.")
        if self.rootHostAssoc != None and not 0 <= self.rootHostAssoc < numHostEdges:
            raise InconsistentAssociationError("The parasite root is associated with host edge "+str(self.rootHostAssoc)+", but the host tree has "+str(numHostEdges)+" edges.")

    def edgeInfoStr(self,edge):
        return super().edgeInfoStr(edge)+" "+str(self.hostAssocT[edge])

    def fileStr(self):
        '''Return a string representation of the parasite tree. Outer
separator is "|".

        rootEdge | edge info | rootTime | rootHostAssoc

        Each edge is "parent child length hostEdge".
        '''
        return super().fileStr()+"|"+repr(self.rootTime)+"|"+str(self.rootHostAssoc)

    def __eq__(self,other):
        return super().__eq__(other) and self.hostAssocT == other.hostAssocT and self.rootTime == other.rootTime and self.rootHostAssoc == other.rootHostAssoc

    def __repr__(self):
        return "ParasiteTree: "+self.fileStr()
