"""
Remote schema: table groups and the DDL that creates them.

The backend is reached over HTTP and cannot run DDL, so the statements are
printed for the operator to run in the database console.
"""

from enum import Enum
from typing import Dict, Optional, Tuple


class TableGroup(str, Enum):
    """Logical table groups; each has one fallback flag."""
    USERS = "users"
    LISTINGS = "listings"
    SAVED_ITEMS = "saved_items"
    MESSAGING = "messaging"


GROUP_RELATIONS: Dict[TableGroup, Tuple[str, ...]] = {
    TableGroup.USERS: ("user_profiles",),
    TableGroup.LISTINGS: ("book_listings",),
    TableGroup.SAVED_ITEMS: ("saved_items",),
    TableGroup.MESSAGING: ("conversations", "messages"),
}

REQUIRED_TABLES: Tuple[str, ...] = (
    "book_listings",
    "user_profiles",
    "saved_items",
    "conversations",
    "messages",
)


def group_for_relation(relation: Optional[str]) -> Optional[TableGroup]:
    """Return the table group owning a relation name, if any."""
    if not relation:
        return None
    name = relation.split(".")[-1]
    for group, relations in GROUP_RELATIONS.items():
        if name in relations:
            return group
    return None


SCHEMAS: Dict[TableGroup, str] = {
    TableGroup.LISTINGS: """
CREATE TABLE IF NOT EXISTS public.book_listings (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    title VARCHAR(255) NOT NULL,
    author VARCHAR(255) NOT NULL,
    price DECIMAL(10, 2) NOT NULL CHECK (price > 0),
    condition VARCHAR(50) NOT NULL CHECK (condition IN ('New', 'Like New', 'Good', 'Fair', 'Acceptable')),
    description TEXT,
    image_url VARCHAR(255),
    category VARCHAR(100),
    edition VARCHAR(100),
    isbn VARCHAR(20),
    publisher VARCHAR(255),
    publication_year INT,
    is_negotiable BOOLEAN DEFAULT FALSE,
    exchange_option BOOLEAN DEFAULT FALSE,
    seller_id UUID NOT NULL REFERENCES auth.users(id) ON DELETE CASCADE,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT now(),
    updated_at TIMESTAMP WITH TIME ZONE DEFAULT now()
);

CREATE INDEX IF NOT EXISTS book_listings_seller_id_idx ON public.book_listings(seller_id);
CREATE INDEX IF NOT EXISTS book_listings_category_idx ON public.book_listings(category);

ALTER TABLE public.book_listings ENABLE ROW LEVEL SECURITY;

CREATE POLICY book_listings_select_policy ON public.book_listings
    FOR SELECT USING (true);
CREATE POLICY book_listings_insert_policy ON public.book_listings
    FOR INSERT WITH CHECK (auth.uid() = seller_id);
CREATE POLICY book_listings_update_policy ON public.book_listings
    FOR UPDATE USING (auth.uid() = seller_id);
CREATE POLICY book_listings_delete_policy ON public.book_listings
    FOR DELETE USING (auth.uid() = seller_id);
""",
    TableGroup.USERS: """
CREATE TABLE IF NOT EXISTS public.user_profiles (
    id UUID PRIMARY KEY REFERENCES auth.users(id) ON DELETE CASCADE,
    name TEXT,
    email TEXT,
    profile_image TEXT,
    bio TEXT,
    location TEXT,
    phone TEXT,
    rating NUMERIC(2, 1) CHECK (rating >= 0 AND rating <= 5),
    join_date TIMESTAMP WITH TIME ZONE DEFAULT now() NOT NULL,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT now() NOT NULL,
    updated_at TIMESTAMP WITH TIME ZONE DEFAULT now() NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_user_profiles_email ON public.user_profiles(email);

ALTER TABLE public.user_profiles ENABLE ROW LEVEL SECURITY;

CREATE POLICY user_profiles_select_policy ON public.user_profiles
    FOR SELECT USING (true);
CREATE POLICY user_profiles_update_policy ON public.user_profiles
    FOR UPDATE USING (auth.uid() = id);
CREATE POLICY user_profiles_insert_policy ON public.user_profiles
    FOR INSERT WITH CHECK (auth.uid() = id);
""",
    TableGroup.SAVED_ITEMS: """
CREATE TABLE IF NOT EXISTS public.saved_items (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id UUID NOT NULL REFERENCES auth.users(id) ON DELETE CASCADE,
    book_id UUID NOT NULL REFERENCES public.book_listings(id) ON DELETE CASCADE,
    type TEXT NOT NULL CHECK (type IN ('favorite', 'wishlist')),
    created_at TIMESTAMP WITH TIME ZONE DEFAULT now() NOT NULL,
    UNIQUE (user_id, book_id, type)
);

CREATE INDEX IF NOT EXISTS idx_saved_items_user_id ON public.saved_items(user_id);
CREATE INDEX IF NOT EXISTS idx_saved_items_book_id ON public.saved_items(book_id);

ALTER TABLE public.saved_items ENABLE ROW LEVEL SECURITY;

CREATE POLICY saved_items_select_policy ON public.saved_items
    FOR SELECT USING (auth.uid() = user_id);
CREATE POLICY saved_items_insert_policy ON public.saved_items
    FOR INSERT WITH CHECK (auth.uid() = user_id);
CREATE POLICY saved_items_update_policy ON public.saved_items
    FOR UPDATE USING (auth.uid() = user_id);
CREATE POLICY saved_items_delete_policy ON public.saved_items
    FOR DELETE USING (auth.uid() = user_id);
""",
    TableGroup.MESSAGING: """
CREATE TABLE IF NOT EXISTS public.conversations (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    listing_id UUID NOT NULL REFERENCES public.book_listings(id) ON DELETE CASCADE,
    buyer_id UUID NOT NULL REFERENCES auth.users(id) ON DELETE CASCADE,
    seller_id UUID NOT NULL REFERENCES auth.users(id) ON DELETE CASCADE,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT now() NOT NULL,
    last_message_at TIMESTAMP WITH TIME ZONE DEFAULT now() NOT NULL,
    is_active BOOLEAN DEFAULT true NOT NULL,
    CHECK (buyer_id <> seller_id),
    UNIQUE (listing_id, buyer_id, seller_id)
);

CREATE TABLE IF NOT EXISTS public.messages (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    conversation_id UUID NOT NULL REFERENCES public.conversations(id) ON DELETE CASCADE,
    sender_id UUID NOT NULL REFERENCES auth.users(id) ON DELETE CASCADE,
    receiver_id UUID NOT NULL REFERENCES auth.users(id) ON DELETE CASCADE,
    content TEXT NOT NULL,
    created_at TIMESTAMP WITH TIME ZONE DEFAULT now() NOT NULL,
    read BOOLEAN DEFAULT false NOT NULL,
    CHECK (sender_id <> receiver_id)
);

CREATE INDEX IF NOT EXISTS idx_conversations_buyer_id ON public.conversations(buyer_id);
CREATE INDEX IF NOT EXISTS idx_conversations_seller_id ON public.conversations(seller_id);
CREATE INDEX IF NOT EXISTS idx_conversations_last_message_at ON public.conversations(last_message_at);
CREATE INDEX IF NOT EXISTS idx_messages_conversation_id ON public.messages(conversation_id);
CREATE INDEX IF NOT EXISTS idx_messages_receiver_id ON public.messages(receiver_id);
CREATE INDEX IF NOT EXISTS idx_messages_created_at ON public.messages(created_at);

ALTER TABLE public.conversations ENABLE ROW LEVEL SECURITY;
ALTER TABLE public.messages ENABLE ROW LEVEL SECURITY;

CREATE POLICY conversations_select_policy ON public.conversations
    FOR SELECT USING (auth.uid() = buyer_id OR auth.uid() = seller_id);
CREATE POLICY conversations_insert_policy ON public.conversations
    FOR INSERT WITH CHECK (auth.uid() = buyer_id OR auth.uid() = seller_id);
CREATE POLICY conversations_update_policy ON public.conversations
    FOR UPDATE USING (auth.uid() = buyer_id OR auth.uid() = seller_id);

CREATE POLICY messages_select_policy ON public.messages
    FOR SELECT USING (
        EXISTS (
            SELECT 1 FROM public.conversations c
            WHERE c.id = conversation_id
            AND (c.buyer_id = auth.uid() OR c.seller_id = auth.uid())
        )
    );
CREATE POLICY messages_insert_policy ON public.messages
    FOR INSERT WITH CHECK (
        sender_id = auth.uid()
        AND EXISTS (
            SELECT 1 FROM public.conversations c
            WHERE c.id = conversation_id
            AND (c.buyer_id = auth.uid() OR c.seller_id = auth.uid())
        )
    );
CREATE POLICY messages_update_policy ON public.messages
    FOR UPDATE USING (receiver_id = auth.uid());
""",
}
