# module for loading parameters.
import ast

#### Base parameters

# These are parameters which users are not likely to need to change.
# We store them in a string of the same format as a parameters file.

baseParamStr = """

#### Input ####

# Cophylogeny file with a host tree line and a parasite tree line
cophyFN = 'cophylogeny.txt'

# Newick file used by the fromNewick task. Must be rooted, bifurcating
# and have branch lengths.
newickFN = None

#### Output ####

# layout task output. If None, print to standard out.
layoutFN = None

# plot task output. The extension determines the format (e.g. .svg,
# .pdf, .png).
plotFN = 'cophylogeny.pdf'

#### Plotting ####

# Colours may be matplotlib colour names or (r, g, b, alpha) tuples
# with values between 0 and 1.
parasiteCol = 'red'
hostCol = 'black'

lineWidth = 1

# Size of the arrow heads marking host jumps
arrowHeadWidth = 0.25
arrowHeadLength = 0.5

#### Layout ####

# When the host tree has a root edge the parasite is drawn slightly to
# the right of and above the host, so that both can be seen. The
# horizontal offset is xShiftFraction times the length of the host
# tree plus the time the parasite arrived. The vertical offset is yShift.
xShiftFraction = 0.001
yShift = 0.1

# Refuse to lay out trees with more tips than this
maxTips = 10000

"""

#### Functions
def createParametersD(baseParamStr,paramFN):
    '''Create and return a parameters dictionary. First parses the string
passed in as baseParamStr. This consists of parameters users are less
likely to modify. Then adds user specific parameters contained in the
file paramFN. Note that because the user parameters are put in the
parameters dictionary second, it is possible for a user to override
one of the base parameters simply by including that parameter in their
parameter file.

    '''
    paramD={}
    baseParamL = baseParamStr.split('\n')
    paramD = addParametersToD(baseParamL,paramD)

    with open(paramFN,'r') as f:
        userParamL = f.read().split('\n')
    paramD = addParametersToD(userParamL,paramD)

    return paramD

def addParametersToD(paramL,paramD):
    '''Given a list of lines (e.g. from a parameters file) add parameters
to paramD. Each line is a string. Some will be comments or blank
lines, and others will be assignment statements whose right hand side
is a python literal. We use the assignment statements to create
entries in paramD.
    '''

    for s in paramL:
        if s == '' or s.lstrip() == '' or s.lstrip()[0]=='#':
            continue
        # it's not a blank line, a line with only whitespace or a
        # comment.  so it must be an assignment statement.
        if '=' not in s:
            raise ValueError("Parameter line '"+s.strip()+"' is not an assignment.")
        key,value = s.rstrip().split('=',1)
        key = key.strip()
        value = value.strip()
        paramD[key] = ast.literal_eval(value)

    return paramD
