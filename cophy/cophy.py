"""Provides the entry point to cophy's functionality."""
__version__ = "1.0.0"
import sys
from . import parameters,trees,layout

TASK_L = ['layout', 'plot', 'toNewick', 'fromNewick', 'version']

def main():

    #### check command line
    if len(sys.argv) != 3 or sys.argv[2] not in TASK_L:
        print(
            """
   Exactly two arguments required.
      1. A path to a parameter file.
      2. The task to be run which must be one of: layout, plot, toNewick, fromNewick or version.

   For example:
      cophy params.py plot
"""
            ,file=sys.stderr)
        sys.exit(1)

    paramFN=sys.argv[1]
    task = sys.argv[2]

    #### version
    if task == 'version':
        print("cophy",__version__)
        return

    #### load parameters
    paramD = parameters.createParametersD(parameters.baseParamStr,paramFN)

    #### layout
    if task == 'layout':
        layoutWrapper(paramD)

    #### plot
    elif task == 'plot':
        plotWrapper(paramD)

    #### toNewick
    elif task == 'toNewick':
        toNewickWrapper(paramD)

    #### fromNewick
    elif task == 'fromNewick':
        fromNewickWrapper(paramD)

######## Task related functions

def checkTreeSize(treeO,maxTips):
    '''Raise ValueError if treeO has more than maxTips tips.'''
    if treeO.leafCount() > maxTips:
        raise ValueError("Tree has "+str(treeO.leafCount())+" tips, more than the maximum of "+str(maxTips)+" set by maxTips.")

def loadCophylogeny(paramD):
    """Read the host and parasite trees named in paramD and check their size."""
    hostTreeO,parasiteTreeO = trees.readCophylogeny(paramD['cophyFN'])
    checkTreeSize(hostTreeO,paramD['maxTips'])
    checkTreeSize(parasiteTreeO,paramD['maxTips'])
    return hostTreeO,parasiteTreeO

def makeLayout(paramD):
    """Load the cophylogeny and lay it out."""
    hostTreeO,parasiteTreeO = loadCophylogeny(paramD)
    return layout.layoutCophylogeny(hostTreeO,parasiteTreeO,paramD['xShiftFraction'],paramD['yShift'])

def layoutWrapper(paramD):
    """Write the layout as a table."""
    layoutO = makeLayout(paramD)
    if paramD['layoutFN'] == None:
        layout.printLayout(layoutO)
    else:
        with open(paramD['layoutFN'],'w') as f:
            layout.printLayout(layoutO,f)
        print("Layout written to",paramD['layoutFN'],file=sys.stderr)

def plotWrapper(paramD):
    """Draw the cophylogeny and save the figure."""
    # imported here so the other tasks don't need a matplotlib backend
    from . import plotCophy

    layoutO = makeLayout(paramD)
    fig = plotCophy.render(layoutO,parasite_col=paramD['parasiteCol'],host_col=paramD['hostCol'],line_width=paramD['lineWidth'],arrow_head_width=paramD['arrowHeadWidth'],arrow_head_length=paramD['arrowHeadLength'])
    fig.save(paramD['plotFN'])
    fig.close()
    print("Plot written to",paramD['plotFN'],file=sys.stderr)

def toNewickWrapper(paramD,fileF=sys.stdout):
    """Print host and parasite trees in newick format."""
    hostTreeO,parasiteTreeO = trees.readCophylogeny(paramD['cophyFN'])
    hostTreeO.check()
    parasiteTreeO.check()
    print(trees.toNewickStr(hostTreeO),file=fileF)
    print(trees.toNewickStr(parasiteTreeO),file=fileF)

def fromNewickWrapper(paramD,fileF=sys.stdout):
    """Print the tree in a newick file as a host line in our format,
followed by its tip names."""
    if paramD['newickFN'] == None:
        raise ValueError("The fromNewick task needs newickFN to be set in the parameter file.")
    treeO,tipNameT = trees.readNewickTree(paramD['newickFN'])
    treeO.check()
    print("# tips: "+" ".join(str(tipNum)+"="+str(name) for tipNum,name in enumerate(tipNameT,1)),file=fileF)
    print(treeO.fileStr(),file=fileF)
