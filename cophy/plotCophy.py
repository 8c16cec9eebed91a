"""
plotCophy.py
Draw a cophylogeny layout using matplotlib.

The host tree is drawn in black. Parasite lines are drawn on top in the
parasite colour, with host jumps drawn as arrows pointing from the
mother's host to the new host. An example call:
    layoutO = layout.layoutCophylogeny(hostTreeO, parasiteTreeO)
    figure = render(layoutO, parasite_col=BLUE)
    figure.save("cophylogeny.svg")
or
    figure.show()

To draw into an existing matplotlib axes (e.g. one panel of a larger
figure), pass it as axes.
"""
from typing import Union, Tuple, NamedTuple

import matplotlib.pyplot as plt

from .layout import CophyLayout, layoutBounds

##################################################################
######################## RENDER SETTINGS #########################
##################################################################

# Colors
# Define new colors as 4-tuples of the form (r, g, b, 1) where
# r, g, b are values between 0 and 1 indicating the amount of red, green, and blue.
RED = (1, 0, 0, 1)
BLACK = (0, 0, 0, 1)
BLUE = (.09, .216, .584, 1)

HOST_EDGE_COLOR = BLACK
PARASITE_EDGE_COLOR = RED

LINEWIDTH = 1
ARROW_HEAD_WIDTH = 0.25     # relative to ARROW_MUTATION_SCALE
ARROW_HEAD_LENGTH = 0.5
ARROW_MUTATION_SCALE = 20

MARGIN = 0.05               # fraction of the host extent left around the drawing

LINE_Z_ORDER = 0
PARASITE_Z_ORDER = 1

DEFAULT_LINESTYLE = '-'

TREE_TITLE = ""

##################################################################
############################ RENDER ##############################
##################################################################

def render(layout_obj: CophyLayout, parasite_col: tuple = PARASITE_EDGE_COLOR, host_col: tuple = HOST_EDGE_COLOR,
           line_width: float = LINEWIDTH, arrow_head_width: float = ARROW_HEAD_WIDTH,
           arrow_head_length: float = ARROW_HEAD_LENGTH, axes: Union[plt.Axes, None] = None):
    """
    Renders a cophylogeny layout using matplotlib
    :param layout_obj: CophyLayout with the four collections of lines
    :param parasite_col: Color (or matplotlib color name) used for parasite lines
    :param host_col: Color used for host lines
    :param line_width: Width of every line
    :param arrow_head_width: Width of host jump arrow heads
    :param arrow_head_length: Length of host jump arrow heads
    :param axes: If specified, draw on the axes instead of creating a new figure
    :return FigureWrapper
    """
    fig = FigureWrapper(TREE_TITLE, axes)
    fig.set_window(layoutBounds(layout_obj))

    for branch in layout_obj.hostBranches:
        fig.line(Position(branch.x1, branch.y), Position(branch.x2, branch.y), host_col, line_width)
    for connector in layout_obj.hostConnectors:
        fig.line(Position(connector.x, connector.y1), Position(connector.x, connector.y2), host_col, line_width)

    for branch in layout_obj.parasiteBranches:
        fig.line(Position(branch.x1, branch.y), Position(branch.x2, branch.y), parasite_col, line_width, zorder=PARASITE_Z_ORDER)
    for connector in layout_obj.parasiteConnectors:
        point_1 = Position(connector.x, connector.y1)
        point_2 = Position(connector.x, connector.y2)
        if connector.hostJump:
            fig.arrow(point_1, point_2, parasite_col, line_width, arrow_head_width, arrow_head_length)
        else:
            fig.line(point_1, point_2, parasite_col, line_width, zorder=PARASITE_Z_ORDER)

    return fig

##################################################################
########################## PLOT TOOLS ############################
##################################################################

class Position(NamedTuple):
    x: float
    y: float

class FigureWrapper:
    """ Class definining plotting methods """
    def __init__(self, title: str, axes: Union[plt.Axes, None] = None):
        """
        If axes is specified, draw on axes instead.
        """
        if axes is None:
            self.fig = plt.figure()
            self.axis = self.fig.subplots(1, 1) # creates a figure with one Axes (plot)
        else:
            self.fig = axes.get_figure()
            self.axis = axes
        self.axis.axis("off")
        self.axis.set_title(title)

    def set_window(self, bounds: Tuple[float, float, float, float], margin: float = MARGIN):
        """
        Set the visible region to bounds (x_min, x_max, y_min, y_max) plus a margin
        on every side, so the slightly offset parasite lines still fit
        """
        x_min, x_max, y_min, y_max = bounds
        x_pad = max(x_max - x_min, 1) * margin
        y_pad = max(y_max - y_min, 1) * margin
        self.axis.set_xlim(x_min - x_pad, x_max + x_pad)
        self.axis.set_ylim(y_min - y_pad, y_max + y_pad)

    def line(self, point_1: Position, point_2: Position, col: tuple = BLACK, linewidth: float = LINEWIDTH,
             linestyle: str = DEFAULT_LINESTYLE, zorder: int = LINE_Z_ORDER):
        """
        Draw line from point p1 to p2
        """
        x_1, y_1 = point_1
        x_2, y_2 = point_2
        self.axis.plot([x_1, x_2], [y_1, y_2], color=col, linewidth=linewidth, linestyle=linestyle, zorder=zorder)

    def arrow(self, point_1: Position, point_2: Position, col: tuple = BLACK, linewidth: float = LINEWIDTH,
              head_width: float = ARROW_HEAD_WIDTH, head_length: float = ARROW_HEAD_LENGTH):
        """
        Draw a line from point 1 to point 2 with an arrow head at point 2
        """
        arrowstyle = "-|>,head_width=%s,head_length=%s" % (head_width, head_length)
        self.axis.annotate("", xy=point_2, xytext=point_1,
                           arrowprops=dict(arrowstyle=arrowstyle, color=col, linewidth=linewidth,
                                           mutation_scale=ARROW_MUTATION_SCALE, shrinkA=0, shrinkB=0),
                           zorder=PARASITE_Z_ORDER)

    def show(self):
        """
        Display figure
        """
        plt.figure(self.fig.number)
        plt.show()

    def save(self, filename: str):
        """
        Save figure to file
        """
        self.fig.savefig(filename)

    def close(self):
        """
        Release the figure
        """
        plt.close(self.fig)
