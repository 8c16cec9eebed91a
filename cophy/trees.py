# functions for reading, writing and converting edge list trees
import io
import re
from Bio import Phylo
from .EdgeTree import *

#### Native format

def edgeTreeFromString(treeStr):
    '''Create an EdgeListTree from the string made by its fileStr method.'''
    fieldL = treeStr.strip().split("|")
    if len(fieldL) != 2:
        raise MalformedTreeError("A host tree string should have 2 fields separated by |, this one has "+str(len(fieldL))+".")
    rootEdgeStr,edgeInfoStr = fieldL
    edgeL,branchLenL,extraL = parseEdgeInfo(edgeInfoStr,3)
    return EdgeListTree(edgeL,branchLenL,parseOptional(rootEdgeStr,float))

def parasiteTreeFromString(treeStr):
    '''Create a ParasiteTree from the string made by its fileStr method.'''
    fieldL = treeStr.strip().split("|")
    if len(fieldL) != 4:
        raise MalformedTreeError("A parasite tree string should have 4 fields separated by |, this one has "+str(len(fieldL))+".")
    rootEdgeStr,edgeInfoStr,rootTimeStr,rootHostAssocStr = fieldL
    edgeL,branchLenL,hostAssocL = parseEdgeInfo(edgeInfoStr,4)
    return ParasiteTree(edgeL,branchLenL,hostAssocL,parseOptional(rootEdgeStr,float),float(rootTimeStr),parseOptional(rootHostAssocStr,int))

def parseEdgeInfo(edgeInfoStr,numFields):
    '''Parse comma separated edge entries. Each entry has numFields
space separated values: parent, child, branch length and, for
parasites, host edge. Returns lists of edges, branch lengths and host
edges (empty for host trees).'''
    edgeL = []
    branchLenL = []
    hostAssocL = []
    if edgeInfoStr.strip() == "":
        return edgeL,branchLenL,hostAssocL
    for entryStr in edgeInfoStr.split(","):
        entryL = entryStr.split()
        if len(entryL) != numFields:
            raise MalformedTreeError("Edge entry '"+entryStr+"' should have "+str(numFields)+" values.")
        edgeL.append((int(entryL[0]),int(entryL[1])))
        branchLenL.append(float(entryL[2]))
        if numFields == 4:
            hostAssocL.append(int(entryL[3]))
    return edgeL,branchLenL,hostAssocL

def parseOptional(valueStr,convertFunc):
    '''Convert valueStr, or return None if it is "None".'''
    valueStr = valueStr.strip()
    if valueStr == "None":
        return None
    return convertFunc(valueStr)

def readCophylogeny(cophyFN):
    '''Read a cophylogeny file. It should contain a host tree line
followed by a parasite tree line, in the format given by the fileStr
methods. Blank lines and lines beginning with # are skipped. Returns
hostTreeO,parasiteTreeO.'''
    lineL = []
    with open(cophyFN,'r') as f:
        for s in f:
            if s.strip() == '' or s.lstrip()[0] == '#':
                continue
            lineL.append(s)
    if len(lineL) != 2:
        raise MalformedTreeError("The cophylogeny file "+cophyFN+" should have 2 tree lines, it has "+str(len(lineL))+".")
    return edgeTreeFromString(lineL[0]),parasiteTreeFromString(lineL[1])

def writeCophylogeny(cophyFN,hostTreeO,parasiteTreeO):
    '''Write a host and parasite tree to cophyFN.'''
    with open(cophyFN,'w') as f:
        f.write("# host\n")
        f.write(hostTreeO.fileStr()+"\n")
        f.write("# parasite\n")
        f.write(parasiteTreeO.fileStr()+"\n")

#### Functions working with biopython trees

def edgeTreeToBioPhylo(treeO,tipNameT=None):
    '''Convert an EdgeListTree to a rooted biopython tree with branch
lengths. The stem, if any, becomes the branch length of the root
clade. Tips are named from tipNameT (indexed by tip id - 1) or else
"t" plus the tip id. Internal nodes are named "n" plus their id.
    '''
    if treeO.isStemOnly():
        name = tipNameT[0] if tipNameT != None else "t1"
        root = Phylo.Newick.Clade(name=name,branch_length=treeO.rootEdge)
        return Phylo.Newick.Tree(root=root,rooted=True)

    numTips = treeO.leafCount()
    cladeD = {}
    for node in range(1,2*numTips):
        if node <= numTips:
            name = tipNameT[node-1] if tipNameT != None else "t"+str(node)
        else:
            name = "n"+str(node)
        cladeD[node] = Phylo.Newick.Clade(name=name)

    for edge,(parent,child) in enumerate(treeO.edgeT):
        cladeD[child].branch_length = treeO.branchLenT[edge]
        cladeD[parent].clades.append(cladeD[child])

    root = cladeD[treeO.rootNode()]
    root.branch_length = treeO.rootEdge
    return Phylo.Newick.Tree(root=root,rooted=True)

def bioPhyloToEdgeTree(bpTree):
    '''Convert a rooted, bifurcating biopython tree with branch lengths
to an EdgeListTree. Tips are numbered 1..T in the order biopython
lists them. Internal nodes are numbered from T+1 in order of
increasing time from the root, ties going to the node first in
preorder. Edges are listed by parent. A branch length on the root
clade becomes the stem. Returns treeO,tipNameT.
    '''
    checkBioPhyloTree(bpTree)

    tipL = bpTree.get_terminals()
    internalL = bpTree.get_nonterminals()  # preorder
    numTips = len(tipL)

    # times from root. biopython clades are keyed by id since they
    # don't define hashing of their own
    timeD = {id(bpTree.root):0.0}
    for clade in internalL:
        for child in clade.clades:
            timeD[id(child)] = timeD[id(clade)] + child.branch_length

    nodeNumD = {}
    for tipNum,clade in enumerate(tipL):
        nodeNumD[id(clade)] = tipNum + 1
    orderL = sorted(range(len(internalL)),key=lambda i: (timeD[id(internalL[i])],i))
    for rank,i in enumerate(orderL):
        nodeNumD[id(internalL[i])] = numTips + 1 + rank

    edgeL = []
    branchLenL = []
    for i in orderL:
        clade = internalL[i]
        for child in clade.clades:
            edgeL.append((nodeNumD[id(clade)],nodeNumD[id(child)]))
            branchLenL.append(child.branch_length)

    treeO = EdgeListTree(edgeL,branchLenL,bpTree.root.branch_length)
    tipNameT = tuple(clade.name for clade in tipL)
    return treeO,tipNameT

def checkBioPhyloTree(bpTree):
    '''Check that a biopython tree has a bifurcating root, is
bifurcating below that and has all its non-root branch lengths. Throw
error if not. Returns None.
    '''
    if len(bpTree.root.clades) != 2:
        raise MalformedTreeError("The root of the input tree has "+str(len(bpTree.root.clades))+" children, it must have exactly 2.")
    if not bpTree.is_bifurcating():
        raise MalformedTreeError("This tree is not bifurcating.")
    for clade in bpTree.find_clades():
        if clade is not bpTree.root and clade.branch_length == None:
            raise MalformedTreeError("All branches below the root of the input tree must have lengths.")

def readNewickTree(treeFN):
    '''Load a rooted newick tree with branch lengths from treeFN. Returns
treeO,tipNameT.'''
    bpTree = Phylo.read(treeFN,'newick',rooted=True)
    return bioPhyloToEdgeTree(bpTree)

def toNewickStr(treeO,tipNameT=None):
    '''Output a newick string with branch lengths. Lengths are written
with repr so they read back exactly. A tree with no stem gets no root
branch length, so that reading the string back gives rootEdge None.'''
    bpTree = edgeTreeToBioPhylo(treeO,tipNameT)
    handle = io.StringIO()
    Phylo.write(bpTree,handle,'newick',format_branch_length='%r')
    newickStr = handle.getvalue().strip()
    if treeO.rootEdge == None:
        # biopython writes a zero length on the root regardless
        newickStr = re.sub(r':[^:,()]*;$',';',newickStr)
    return newickStr
