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

from pycrp.util import ContractViolation


class TableHistogram(object):
    '''
    Seating of the customers of a single dish.

    Tables are not tracked individually; only the number of tables of each
    occupancy is kept, in histogram[size] = count. Bins with count zero are
    never stored.
    '''
    def __init__(self):
        self.histogram = {}
        self.tables = 0
        self.customers = 0

    def num_tables(self):
        return self.tables

    def num_customers(self):
        return self.customers

    def __iter__(self):
        return iter(self.histogram.items())

    def __len__(self):
        return len(self.histogram)

    def __eq__(self, other):
        return (
            isinstance(other, TableHistogram) and
            self.histogram == other.histogram)

    def __str__(self):
        bins = ' '.join(
            '{}:{}'.format(size, count)
            for size, count in sorted(self.histogram.items()))
        return '[{}|{}|{}]'.format(self.customers, bins, self.tables)

    __repr__ = __str__

    def _move_table(self, size, new_size):
        count = self.histogram[size] - 1
        if count:
            self.histogram[size] = count
        else:
            del self.histogram[size]
        if new_size:
            self.histogram[new_size] = self.histogram.get(new_size, 0) + 1

    def _choose_size(self, weight, total, rng):
        r = rng.random() * total
        chosen = None
        for size, count in self.histogram.items():
            chosen = size
            r -= weight(size) * count
            if r < 0:
                break
        assert chosen is not None, 'no tables to choose from'
        return chosen

    def create_table(self):
        self.histogram[1] = self.histogram.get(1, 0) + 1
        self.tables += 1
        self.customers += 1

    def share_table(self, discount, rng):
        '''
        Seat one more customer at an existing table, choosing a table of
        occupancy k with weight (k - discount).
        '''
        if not self.tables:
            raise ContractViolation('cannot share a table: no tables')
        total = self.customers - self.tables * discount
        size = self._choose_size(lambda k: k - discount, total, rng)
        self._move_table(size, size + 1)
        self.customers += 1

    def remove_customer(self, rng):
        '''
        Remove a customer chosen uniformly at random.
        Returns -1 if this closed the customer's table, otherwise 0.
        '''
        if not self.customers:
            raise ContractViolation('cannot remove a customer: no customers')
        size = self._choose_size(lambda k: k, self.customers, rng)
        self._move_table(size, size - 1)
        self.customers -= 1
        if size == 1:
            self.tables -= 1
            return -1
        return 0
