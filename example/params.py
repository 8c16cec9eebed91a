## This parameter file contains python expressions with info on files
## and parameters.

## Note that many other parameters are specified in the parameters.py
## file in the repository. It possible to change the values for those
## other parameters simply by adding them (with a different value) to
## this file. Values specified here will override whatever is in
## parameters.py.

#### Input ####

# host and parasite trees
cophyFN = 'example.cophy'

# newick tree for the fromNewick task
newickFN = 'example.tre'

#### Output ####

plotFN = 'example.pdf'
layoutFN = 'exampleLayout.tsv'

#### Plotting ####

parasiteCol = 'red'
