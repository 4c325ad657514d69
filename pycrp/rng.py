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

import numpy.random


class BaseRandom(object):
    '''
    Derived classes only need to supply random(), a uniform draw in [0, 1).
    '''
    def random(self):
        raise NotImplementedError()

    def bernoulli(self, p_false, p_true):
        '''
        Return True with probability p_true / (p_false + p_true).
        '''
        total = p_false + p_true
        assert total > 0, (p_false, p_true)
        return self.random() * total >= p_false

    def sample_discrete(self, weights):
        total = sum(weights)
        assert total > 0, weights
        r = self.random() * total
        for i, weight in enumerate(weights):
            r -= weight
            if r < 0:
                return i
        return len(weights) - 1


class RandomSource(BaseRandom):
    def __init__(self, seed=None):
        self.state = numpy.random.RandomState(seed)

    def seed(self, seed):
        self.state.seed(seed)

    def random(self):
        return self.state.random_sample()
