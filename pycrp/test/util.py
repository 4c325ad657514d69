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

import os
from pycrp.rng import BaseRandom

CLEANUP_ON_ERROR = int(os.environ.get('CLEANUP_ON_ERROR', 1))

# bernoulli(p_empty, p_share) shares iff random() * total >= p_empty
ALWAYS_NEW_TABLE = 0.0
ALWAYS_SHARE = 1.0 - 1e-9


class FixedRandom(BaseRandom):
    def __init__(self, value):
        assert 0.0 <= value < 1.0, value
        self.value = value

    def random(self):
        return self.value


class SequenceRandom(BaseRandom):
    def __init__(self, values):
        self.values = list(values)
        self.pos = 0

    def random(self):
        value = self.values[self.pos % len(self.values)]
        self.pos += 1
        return value


def assert_invariants(restaurant):
    customers = 0
    tables = 0
    for dish, histogram in restaurant:
        assert histogram.num_customers() >= 1, dish
        assert 1 <= histogram.num_tables() <= histogram.num_customers(), dish
        assert histogram.num_customers() == sum(
            size * count for size, count in histogram)
        assert histogram.num_tables() == sum(count for _, count in histogram)
        customers += histogram.num_customers()
        tables += histogram.num_tables()
    assert restaurant.num_customers() == customers
    assert restaurant.num_tables() == tables
    assert restaurant.num_tables() <= restaurant.num_customers()
    assert 0.0 <= restaurant.discount < 1.0
    assert restaurant.strength > -restaurant.discount


def random_walk(restaurant, rng, step_count, dish_count=5):
    '''
    Randomly seat and unseat customers, keeping the restaurant non-empty
    about two thirds of the time.
    '''
    p0 = 1.0 / dish_count
    for _ in range(step_count):
        dish = rng.sample_discrete([1.0] * dish_count)
        if dish in restaurant and rng.random() < 1.0 / 3.0:
            restaurant.decrement(dish, rng)
        else:
            restaurant.increment(dish, p0, rng)
