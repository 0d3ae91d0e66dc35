#!/usr/bin/env python
#    propshatest/codectest.py - test cases for the Propsha type codec
#    Copyright (C) 2009 Shawn Sulma <genosha@470th.org>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
import math, struct, sys, unittest
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Union

from propsha.codec import Byte, Short, Long, Float, Kind, decode, encode, kind_of, type_name
from propshatest import Primitives

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

def single ( value ) :
    return struct.unpack( '<f', struct.pack( '<f', value ) )[0]

class CodecTests ( unittest.TestCase ) :
    def testClosedSet ( self ) :
        """The kinds and their document names, in dispatch order"""
        assert [ k.type_name for k in Kind ] == [ 'boolean', 'java.lang.Boolean', 'byte', 'java.lang.Byte'
            , 'java.util.Date', 'double', 'java.lang.Double', 'float', 'java.lang.Float', 'int'
            , 'java.lang.Integer', 'long', 'java.lang.Long', 'short', 'java.lang.Short', 'java.lang.String' ]

    def testNamed ( self ) :
        assert Kind.named( 'int' ) is Kind.INT
        assert Kind.named( 'java.lang.Integer' ) is Kind.INTEGER
        assert Kind.named( 'Integer' ) is None
        assert Kind.named( '' ) is None

    def testUnknownType ( self ) :
        assert decode( 'java.util.List', '[a]' ) is None
        assert decode( '', '' ) is None
        assert decode( 'INT', '1' ) is None

    def testBoolean ( self ) :
        assert decode( 'boolean', 'true' ) is True
        assert decode( 'java.lang.Boolean', 'TrUe' ) is True
        assert decode( 'boolean', 'false' ) is False
        assert decode( 'boolean', 'yes' ) is False
        assert decode( 'boolean', '' ) is False
        assert encode( Kind.BOOLEAN, True ) == 'true'
        assert encode( Kind.BOOLEAN_OBJECT, False ) == 'false'

    def testIntegralRanges ( self ) :
        """Integral values must fit the width of their kind"""
        assert decode( 'byte', '127' ) == 127
        assert decode( 'byte', '-128' ) == -128
        assert decode( 'byte', '128' ) is None
        assert decode( 'java.lang.Short', '-32768' ) == -32768
        assert decode( 'short', '32768' ) is None
        assert decode( 'int', '2147483647' ) == 2147483647
        assert decode( 'java.lang.Integer', '2147483648' ) is None
        assert decode( 'long', '-9223372036854775808' ) == -9223372036854775808
        assert decode( 'java.lang.Long', '9223372036854775808' ) is None

    def testIntegralSyntax ( self ) :
        assert decode( 'int', '+5' ) == 5
        assert decode( 'int', '007' ) == 7
        for text in ( '', ' 5', '5 ', '1_000', '5.0', '0x10', 'five', '-' ) :
            assert decode( 'int', text ) is None, text

    def testDouble ( self ) :
        assert decode( 'double', '0.1' ) == 0.1
        assert decode( 'double', '1.0E10' ) == 1e10
        assert decode( 'java.lang.Double', '1.5d' ) == 1.5
        assert decode( 'double', '  2.5  ' ) == 2.5
        assert decode( 'double', '.5' ) == 0.5
        assert decode( 'double', '-Infinity' ) == -math.inf
        assert math.isnan( decode( 'double', 'NaN' ) )
        for text in ( '', 'inf', 'nan', '0x10', '0xp3', '1e', 'abc', '1_0' ) :
            assert decode( 'double', text ) is None, text
        assert encode( Kind.DOUBLE, 0.1 ) == '0.1'
        assert encode( Kind.DOUBLE, 3 ) == '3.0'
        assert encode( Kind.DOUBLE_OBJECT, math.inf ) == 'Infinity'
        assert encode( Kind.DOUBLE, -math.inf ) == '-Infinity'
        assert encode( Kind.DOUBLE, math.nan ) == 'NaN'

    def testHexadecimal ( self ) :
        """Hexadecimal literals need a binary exponent"""
        assert decode( 'double', '0x1p3' ) == 8.0
        assert decode( 'java.lang.Double', '-0X1.8P1d' ) == -3.0
        assert decode( 'double', '0x.8p0' ) == 0.5
        assert decode( 'float', '0x1.99999ap-4f' ) == single( 0.1 )

    def testFloat ( self ) :
        """Floats are single precision"""
        assert decode( 'float', '0.1' ) == single( 0.1 )
        assert decode( 'float', '0.1' ) != 0.1
        assert decode( 'java.lang.Float', '1e39' ) == math.inf
        assert decode( 'float', '-1e39' ) == -math.inf
        assert encode( Kind.FLOAT, 0.1 ) == '0.1'
        assert encode( Kind.FLOAT, single( 0.1 ) ) == '0.1'
        assert encode( Kind.FLOAT, 1.25 ) == '1.25'
        assert encode( Kind.FLOAT_OBJECT, 16777216.0 ) == '16777216.0'

    def testDate ( self ) :
        when = datetime( 2014, 3, 9, 17, 5, 22, 41999, tzinfo = timezone( timedelta( hours = -6 ) ) )
        assert encode( Kind.DATE, when ) == '2014-03-09T17:05:22.041-0600'
        assert decode( 'java.util.Date', '2014-03-09T17:05:22.041-0600' ) == when.replace( microsecond = 41000 )
        india = datetime( 2001, 12, 31, 23, 59, 59, tzinfo = timezone( timedelta( hours = 5, minutes = 30 ) ) )
        assert encode( Kind.DATE, india ) == '2001-12-31T23:59:59.000+0530'
        for text in ( '2014-03-09', '2014-03-09T17:05:22-0600', 'yesterday', '' ) :
            assert decode( 'java.util.Date', text ) is None, text

    def testDateMilliseconds ( self ) :
        """The millisecond field is a count of milliseconds, whatever its width"""
        base = datetime( 2014, 3, 9, 17, 5, 22, tzinfo = timezone( timedelta( hours = -6 ) ) )
        assert decode( 'java.util.Date', '2014-03-09T17:05:22.41-0600' ) == base.replace( microsecond = 41000 )
        assert decode( 'java.util.Date', '2014-03-09T17:05:22.4-0600' ) == base.replace( microsecond = 4000 )
        assert decode( 'java.util.Date', '2014-03-09T17:05:22.0041-0600' ) == base.replace( microsecond = 41000 )
        assert decode( 'java.util.Date', '2014-03-09T17:05:22.1500-0600' ) == base + timedelta( seconds = 1, milliseconds = 500 )
        assert decode( 'java.util.Date', '2014-03-09T17:05:22.-0600' ) is None

    def testNaiveDate ( self ) :
        """Naive datetimes are taken as local time"""
        naive = datetime( 2020, 6, 1, 12, 30, 0, 125000 )
        assert decode( 'java.util.Date', encode( Kind.DATE, naive ) ) == naive.astimezone()

    def testString ( self ) :
        assert decode( 'java.lang.String', ' <a & b> ' ) == ' <a & b> '
        assert encode( Kind.STRING, 'x' ) == 'x'

    def testRoundTrip ( self ) :
        """decode( encode( v ) ) gives v back for every kind"""
        samples = { Kind.BOOLEAN : [ True, False ], Kind.BYTE : [ -128, 0, 127 ], Kind.SHORT_OBJECT : [ -32768, 32767 ]
            , Kind.INT : [ -2 ** 31, 2 ** 31 - 1 ], Kind.LONG : [ -2 ** 63, 2 ** 63 - 1 ]
            , Kind.DOUBLE : [ 0.1, -1e-300, 1.7976931348623157e308, 123456789.123 ]
            , Kind.FLOAT : [ single( 0.1 ), single( 3.4e38 ), single( -1.17549435e-38 ) ]
            , Kind.STRING : [ '', 'plain', 'x]]>y' ]
            , Kind.DATE : [ datetime( 1999, 1, 2, 3, 4, 5, 6000, tzinfo = timezone.utc ) ] }
        for kind, values in samples.items() :
            for value in values :
                assert decode( kind.type_name, encode( kind, value ) ) == value, ( kind, value )

    def testKindOf ( self ) :
        assert kind_of( bool ) is Kind.BOOLEAN
        assert kind_of( Optional[bool] ) is Kind.BOOLEAN_OBJECT
        assert kind_of( Byte ) is Kind.BYTE
        assert kind_of( Optional[Short] ) is Kind.SHORT_OBJECT
        assert kind_of( int ) is Kind.INT
        assert kind_of( Optional[int] ) is Kind.INTEGER
        assert kind_of( Long ) is Kind.LONG
        assert kind_of( float ) is Kind.DOUBLE
        assert kind_of( Float ) is Kind.FLOAT
        assert kind_of( Optional[Float] ) is Kind.FLOAT_OBJECT
        assert kind_of( datetime ) is Kind.DATE
        assert kind_of( Optional[datetime] ) is Kind.DATE
        assert kind_of( Optional[str] ) is Kind.STRING
        assert kind_of( Kind.LONG_OBJECT ) is Kind.LONG_OBJECT
        assert kind_of( list ) is None
        assert kind_of( List[int] ) is None
        assert kind_of( Union[int, str] ) is None
        assert kind_of( Optional[list] ) is None

    @unittest.skipIf( sys.version_info < ( 3, 10 ), "X | None needs python 3.10" )
    def testUnionOperator ( self ) :
        assert kind_of( eval( "int | None" ) ) is Kind.INTEGER
        assert kind_of( eval( "None | Long" ) ) is Kind.LONG_OBJECT

    def testTypeName ( self ) :
        assert type_name( int ) == 'int'
        assert type_name( Optional[float] ) == 'java.lang.Double'
        assert type_name( list ) == 'list'
        assert type_name( Primitives ) == 'propshatest.Primitives'

if __name__ == "__main__":
    unittest.main()
