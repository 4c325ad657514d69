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

STRENGTH_RANGE = (0.1, 100.0)
MAX_DISCOUNT = 0.5


def uniform(min_val, max_val, point_count):
    grid = numpy.arange(point_count) + 0.5
    grid *= (max_val - min_val) / float(point_count)
    grid += min_val
    return grid


def center_heavy(min_val, max_val, point_count):
    grid = uniform(-1, 1, point_count)
    grid = numpy.arcsin(grid) / numpy.pi + 0.5
    grid *= max_val - min_val
    grid += min_val
    return grid


def left_heavy(min_val, max_val, point_count):
    grid = uniform(0, 1, point_count)
    grid = grid ** 2
    grid *= max_val - min_val
    grid += min_val
    return grid


def right_heavy(min_val, max_val, point_count):
    grid = left_heavy(max_val, min_val, point_count)
    return grid[::-1].copy()


def pitman_yor(strength_count=20, discount_count=10):
    '''
    Grid of {'strength': c, 'discount': d} points, log-spaced in strength
    over STRENGTH_RANGE and denser near small discounts below MAX_DISCOUNT.

    Both parameters raise the expected number of tables, so the largest
    strengths are only paired with the smallest discounts. For d = 0,
        E[table_count] = O(strength log(customer_count))
    '''
    min_strength, max_strength = STRENGTH_RANGE
    xs = center_heavy(0, 1, strength_count)
    ys = left_heavy(0, 1, discount_count)
    strengths = min_strength * (max_strength / min_strength) ** xs
    discounts = MAX_DISCOUNT * ys
    return [
        {'strength': float(strength), 'discount': float(discount)}
        for x, strength in zip(xs, strengths)
        for y, discount in zip(ys, discounts)
        if x + y < 1
    ]
