# Copyright (c) 2014, Salesforce.com, Inc.  All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
# - Redistributions of source code must retain the above copyright
#   notice, this list of conditions and the following disclaimer.
# - Redistributions in binary form must reproduce the above copyright
#   notice, this list of conditions and the following disclaimer in the
#   documentation and/or other materials provided with the distribution.
# - Neither the name of Salesforce.com nor the names of its contributors
#   may be used to endorse or promote products derived from this
#   software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED.  IN NO EVENT SHALL THE
# COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS
# OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND
# ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR
# TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE
# USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

import numpy
import pycrp.gridding
from pycrp.util import LOG

DEFAULTS = {
    'pitman_yor': pycrp.gridding.pitman_yor(),
    'dirichlet': [
        {'strength': strength, 'discount': 0.0}
        for strength in numpy.logspace(-1, 2, 30).tolist()
    ],
}


def grid_scores(restaurant, grid=None):
    '''
    Return a list of (point, log_likelihood) pairs, evaluating the current
    seating under each {'strength': c, 'discount': d} point of the grid.
    Points outside the valid region or where the likelihood is undefined
    under the restaurant's hyperpriors are skipped.
    '''
    if grid is None:
        grid = DEFAULTS['pitman_yor']
    scores = []
    for point in grid:
        discount = point['discount']
        strength = point['strength']
        if not (0 <= discount < 1 and strength > -discount):
            continue
        if discount == 0 and restaurant.has_discount_prior():
            continue
        scores.append((point, restaurant.log_likelihood(discount, strength)))
    return scores


def grid_search(restaurant, grid=None):
    '''
    Move the restaurant's hyperparameters to the best-scoring grid point.
    Returns that point.
    '''
    scores = grid_scores(restaurant, grid)
    assert scores, 'no valid grid points'
    point, score = max(scores, key=lambda pair: pair[1])
    restaurant.set_hyperparameters(point['discount'], point['strength'])
    LOG('grid search chose PYP(d={},c={}) with score {}'.format(
        point['discount'],
        point['strength'],
        score), verbosity=2)
    return point
