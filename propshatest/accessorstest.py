#!/usr/bin/env python
#    propshatest/accessorstest.py - test cases for Propsha accessor discovery
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
import unittest
from typing import Optional

from propsha import Byte, Kind, overloads
from propsha.accessors import find_setter, getters, is_getter, parameter_kind, property_name, setter_name
from propshatest import Account, Derived, Person, Primitives

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

class Odd ( object ) :
    def get ( self ) -> int : return 1
    def getNothing ( self ) -> None : pass
    def getWithArgument ( self, x ) -> int : return x
    def getWithDefault ( self, x = 1 ) -> int : return x
    def getUnannotated ( self ) : return 1
    def isolate ( self ) -> int : return 2
    @staticmethod
    def getStatic ( ) -> int : return 3
    @classmethod
    def getClassy ( cls ) -> int : return 5
    @property
    def getProperty ( self ) -> int : return 4
    def setTwo ( self, a : int, b : int ) : pass
    def setLoose ( self, a ) : pass
    def setKeyword ( self, *, a : int ) : pass

class AccessorTests ( unittest.TestCase ) :
    def testSetterName ( self ) :
        assert setter_name( "" ) == "set"
        assert setter_name( "id" ) == "setId"
        assert setter_name( "appName" ) == "setAppName"
        assert setter_name( "uRL" ) == "setURL"
        assert setter_name( "x" ) == "setX"

    def testPropertyName ( self ) :
        assert property_name( "isActive" ) == "active"
        assert property_name( "getId" ) == "id"
        assert property_name( "getAppName" ) == "appName"
        assert property_name( "getA" ) == "a"

    def testPropertyNameQuirk ( self ) :
        """Only the first character is lower-cased"""
        assert property_name( "getURL" ) == "uRL"
        assert setter_name( property_name( "getURL" ) ) == "setURL"

    def testIsGetter ( self ) :
        members = vars( Odd )
        assert is_getter( Primitives.getCount )
        assert is_getter( Primitives.isActive )
        assert not is_getter( Primitives.setCount )
        assert not is_getter( Primitives.helper )
        assert not is_getter( members['get'] )
        assert not is_getter( members['get'], name = "is" )
        assert not is_getter( members['getNothing'] )
        assert not is_getter( members['getWithArgument'] )
        assert not is_getter( members['getWithDefault'] )
        assert is_getter( members['getUnannotated'] )

    def testIsGetterInstanceMethodsOnly ( self ) :
        """Static methods, class methods and properties hold no per-instance state and are
        never saved"""
        members = vars( Odd )
        assert not is_getter( members['getStatic'] )
        assert not is_getter( members['getClassy'] )
        assert not is_getter( members['getProperty'] )
        assert not is_getter( Odd.getClassy )
        assert [ name for name, getter, annotation in getters( Odd() ) ] == [ 'unannotated', 'olate' ]

    def testIsGetterPrefixOnly ( self ) :
        """Any name starting with 'is' counts, as the convention is purely lexical"""
        assert is_getter( vars( Odd )['isolate'] )
        assert [ name for name, getter, annotation in getters( Odd() ) ] == [ 'unannotated', 'olate' ]

    def testIsGetterUsesBoundName ( self ) :
        assert is_getter( Primitives.helper, name = "getHelp" )
        assert not is_getter( Primitives.getCount, name = "count" )

    def testGetters ( self ) :
        found = [ ( name, annotation ) for name, getter, annotation in getters( Primitives() ) ]
        assert found[:3] == [ ( 'flag', bool ), ( 'active', bool ), ( 'small', Byte ) ]
        assert len( found ) == 10
        assert list( getters( Derived() ) ) == []

    def testFindSetter ( self ) :
        data = Primitives()
        setter = find_setter( data, "setCount", "int" )
        assert setter is not None
        setter( 5 )
        assert data.getCount() == 5
        assert find_setter( data, "setCount", "java.lang.Integer" ) is None
        assert find_setter( data, "setCount", "long" ) is None
        assert find_setter( data, "setMissing", "int" ) is None
        assert find_setter( data, "setCount", "java.util.List" ) is None
        assert find_setter( data, "getCount", "int" ) is None

    def testFindSetterExactClass ( self ) :
        """Setters inherited from a base class are not found"""
        assert find_setter( Derived(), "setCount", "int" ) is None

    def testFindSetterByKind ( self ) :
        person = Person()
        assert find_setter( person, "setAge", "int" ) is None
        find_setter( person, "setAge", "long" )( 41 )
        assert person.age == 41

    def testOverloads ( self ) :
        """The variant accepting the named kind is found"""
        account = Account()
        find_setter( account, "setAmount", "double" )( 1.5 )
        find_setter( account, "setAmount", "java.lang.Double" )( 2.5 )
        assert ( account.primitive, account.boxed ) == ( 1.5, 2.5 )
        assert find_setter( account, "setAmount", "float" ) is None

    def testOverloadsDirectCall ( self ) :
        account = Account()
        account.setAmount( 7.0 )
        assert account.primitive == 7.0
        assert account.boxed is None
        assert isinstance( Account.setAmount, overloads )
        assert Account.setAmount.__name__ == "setAmount"
        assert len( Account.setAmount.variants ) == 2

    def testOverloadsVariant ( self ) :
        assert Account.setAmount.variant( Kind.DOUBLE_OBJECT ) is Account.setAmount.variants[1]
        assert Account.setAmount.variant( Kind.INT ) is None

    def testOverloadsRejectsNonFunctions ( self ) :
        self.assertRaises( TypeError, overloads, 5 )
        self.assertRaises( TypeError, Account.setAmount.register, staticmethod( len ) )

    def testParameterKind ( self ) :
        members = vars( Odd )
        assert parameter_kind( Primitives.setTotal ) is Kind.LONG
        assert parameter_kind( Account.setAmount.variants[1] ) is Kind.DOUBLE_OBJECT
        assert parameter_kind( members['setTwo'] ) is None
        assert parameter_kind( members['setLoose'] ) is None
        assert parameter_kind( members['setKeyword'] ) is None

    def testStringAnnotations ( self ) :
        """Annotations written as strings are resolved"""
        namespace = {}
        exec( "from typing import Optional\n"
            "class Later ( object ) :\n"
            "    def getValue ( self ) -> 'Optional[int]' : return 1\n"
            "    def setValue ( self, value : 'Optional[int]' ) : self.value = value\n", namespace )
        later = namespace['Later']()
        assert [ a for n, g, a in getters( later ) ] == [ Optional[int] ]
        find_setter( later, "setValue", "java.lang.Integer" )( 9 )
        assert later.value == 9

if __name__ == "__main__":
    unittest.main()
